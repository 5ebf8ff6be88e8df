"""Dynamic Object Service - unified CRUD over dynamic objects of connected CRMs.

Exposes one REST surface and dispatches each call to HubSpot, Zoho,
Salesforce, Pipedrive, Close or MS Dynamics 365 based on the tenant's
stored connection.
"""

from __future__ import annotations

from crm_service_libs.error_handling.fastapi import (
    register_error_handlers as register_fastapi_error_handlers,
)
from crm_service_libs.logging_utils import configure_service_logging, create_service_logger
from dishka import make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from services.dynamic_object_service.api.dynamic_object_routes import router as dynamic_router
from services.dynamic_object_service.api.health_routes import router as health_router
from services.dynamic_object_service.config import settings
from services.dynamic_object_service.di import DynamicObjectServiceProvider, RequestContextProvider
from services.dynamic_object_service.middleware import CorrelationIDMiddleware

logger = create_service_logger("dynamic_object_service")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_service_logging(
        settings.SERVICE_NAME,
        environment=settings.ENVIRONMENT.value,
        log_level=settings.LOG_LEVEL,
    )

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version="0.1.0",
        description="Dynamic Object Service - unified CRUD across CRM vendors",
        docs_url="/docs" if settings.is_development() else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development() else None,
    )

    register_fastapi_error_handlers(app)
    app.add_middleware(CorrelationIDMiddleware)

    app.include_router(health_router)
    app.include_router(dynamic_router, prefix="/crm/dynamic", tags=["Dynamic Objects"])

    container = make_async_container(
        DynamicObjectServiceProvider(),
        RequestContextProvider(),
        FastapiProvider(),
    )
    setup_dishka(container, app)
    app.state.di_container = container

    logger.info("Dynamic Object Service created", environment=settings.ENVIRONMENT.value)
    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.dynamic_object_service.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
        log_level=settings.LOG_LEVEL.lower(),
    )
