"""Dynamic Object Service middleware components."""

from __future__ import annotations

from uuid import UUID, uuid4

from crm_service_libs.logging_utils import bind_request_context, clear_request_context
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Ensures every request has a correlation ID and a bound logging context."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        x_correlation_id = request.headers.get("X-Correlation-ID")
        if x_correlation_id:
            try:
                correlation_id = UUID(x_correlation_id)
            except ValueError:
                correlation_id = uuid4()
        else:
            correlation_id = uuid4()

        request.state.correlation_id = correlation_id
        bind_request_context(
            correlation_id=str(correlation_id),
            tenant_id=request.headers.get("X-Tenant-ID"),
            path=request.url.path,
            method=request.method,
        )
        try:
            response = await call_next(request)
        finally:
            clear_request_context()
        response.headers["X-Correlation-ID"] = str(correlation_id)
        return response
