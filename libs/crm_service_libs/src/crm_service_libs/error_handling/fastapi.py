"""FastAPI integration for CRMServiceError.

Converts CRMServiceError into the standard error body
``{"error": {"code", "message", ...}}``, reports request validation failures
in the same shape and turns every other unhandled
exception into a generic 500 response.
"""

from __future__ import annotations

from uuid import uuid4

from crm_common_core.error_enums import ErrorCode
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..logging_utils import create_service_logger
from .crm_error import CRMServiceError
from .factories import create_error_detail

logger = create_service_logger("error_handling.fastapi")

ERROR_CODE_TO_STATUS: dict[str, int] = {
    ErrorCode.VALIDATION_ERROR.value: 400,
    ErrorCode.AUTHENTICATION_ERROR.value: 401,
    ErrorCode.RESOURCE_NOT_FOUND.value: 404,
    ErrorCode.EXTERNAL_SERVICE_ERROR.value: 502,
    ErrorCode.INVALID_RESPONSE.value: 502,
    ErrorCode.CONNECTION_ERROR.value: 503,
    ErrorCode.TIMEOUT.value: 504,
}


def status_code_for(error: CRMServiceError) -> int:
    return ERROR_CODE_TO_STATUS.get(error.error_code, 500)


def error_response_body(error: CRMServiceError) -> dict:
    detail = error.error_detail
    return {
        "error": {
            "code": detail.error_code.value,
            "message": detail.message,
            "correlation_id": str(detail.correlation_id),
            "service": detail.service,
            "operation": detail.operation,
            "details": detail.details,
            "timestamp": detail.timestamp.isoformat(),
        }
    }


def register_error_handlers(app: FastAPI) -> None:
    """Register CRMServiceError, request validation and catch-all handlers."""

    @app.exception_handler(CRMServiceError)
    async def handle_crm_service_error(request: Request, exc: CRMServiceError) -> JSONResponse:
        status_code = status_code_for(exc)
        logger.warning(
            "Request failed with application error",
            error_code=exc.error_code,
            status_code=status_code,
            path=request.url.path,
            correlation_id=exc.correlation_id,
        )
        return JSONResponse(status_code=status_code, content=error_response_body(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            {
                "loc": ".".join(str(part) for part in error.get("loc", ())),
                "msg": error.get("msg", ""),
                "type": error.get("type", ""),
            }
            for error in exc.errors()
        ]
        error = CRMServiceError(
            create_error_detail(
                error_code=ErrorCode.VALIDATION_ERROR,
                message="Request validation failed",
                service=request.app.title,
                operation=f"{request.method} {request.url.path}",
                correlation_id=getattr(request.state, "correlation_id", None) or uuid4(),
                details={"field": errors[0]["loc"] if errors else "", "errors": errors},
            )
        )
        logger.warning(
            "Request failed validation",
            path=request.url.path,
            field=error.error_detail.details["field"],
            correlation_id=error.correlation_id,
        )
        return JSONResponse(status_code=status_code_for(error), content=error_response_body(error))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        correlation_id = getattr(request.state, "correlation_id", None) or uuid4()
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            correlation_id=str(correlation_id),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": ErrorCode.UNKNOWN_ERROR.value,
                    "message": "Internal server error",
                    "correlation_id": str(correlation_id),
                    "details": {},
                }
            },
        )
