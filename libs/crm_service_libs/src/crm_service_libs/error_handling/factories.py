"""
Factory functions that build an ErrorDetail and raise CRMServiceError.

Every factory takes the raising service and operation, a correlation id and
arbitrary keyword context that ends up in ``ErrorDetail.details``.
"""

from __future__ import annotations

import traceback
from datetime import datetime, timezone
from typing import Any, NoReturn
from uuid import UUID

from crm_common_core.error_enums import ErrorCode
from crm_common_core.models.error_models import ErrorDetail
from opentelemetry import trace

from .crm_error import CRMServiceError


def create_error_detail(
    error_code: ErrorCode,
    message: str,
    service: str,
    operation: str,
    correlation_id: UUID,
    details: dict[str, Any] | None = None,
    capture_stack: bool = False,
) -> ErrorDetail:
    """Create an ErrorDetail, attaching trace/span ids when a span is active."""
    trace_id: str | None = None
    span_id: str | None = None
    span = trace.get_current_span()
    if span is not None:
        span_context = span.get_span_context()
        if span_context.is_valid:
            trace_id = format(span_context.trace_id, "032x")
            span_id = format(span_context.span_id, "016x")

    return ErrorDetail(
        error_code=error_code,
        message=message,
        correlation_id=correlation_id,
        timestamp=datetime.now(timezone.utc),
        service=service,
        operation=operation,
        details=details or {},
        stack_trace="".join(traceback.format_stack()) if capture_stack else None,
        trace_id=trace_id,
        span_id=span_id,
    )


def _raise(
    error_code: ErrorCode,
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    details: dict[str, Any],
) -> NoReturn:
    raise CRMServiceError(
        create_error_detail(
            error_code=error_code,
            message=message,
            service=service,
            operation=operation,
            correlation_id=correlation_id,
            details=details,
        )
    )


def raise_unknown_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    _raise(ErrorCode.UNKNOWN_ERROR, service, operation, message, correlation_id, additional_context)


def raise_validation_error(
    service: str,
    operation: str,
    field: str,
    message: str,
    correlation_id: UUID,
    value: Any = None,
    **additional_context: Any,
) -> NoReturn:
    details: dict[str, Any] = {"field": field}
    if value is not None:
        details["value"] = value
    details.update(additional_context)
    _raise(ErrorCode.VALIDATION_ERROR, service, operation, message, correlation_id, details)


def raise_resource_not_found(
    service: str,
    operation: str,
    resource_type: str,
    resource_id: str,
    correlation_id: UUID,
    message: str | None = None,
    **additional_context: Any,
) -> NoReturn:
    details = {"resource_type": resource_type, "resource_id": resource_id, **additional_context}
    _raise(
        ErrorCode.RESOURCE_NOT_FOUND,
        service,
        operation,
        message or f"{resource_type} with ID '{resource_id}' not found",
        correlation_id,
        details,
    )


def raise_configuration_error(
    service: str,
    operation: str,
    config_key: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    details = {"config_key": config_key, **additional_context}
    _raise(ErrorCode.CONFIGURATION_ERROR, service, operation, message, correlation_id, details)


def raise_authentication_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    _raise(
        ErrorCode.AUTHENTICATION_ERROR,
        service,
        operation,
        message,
        correlation_id,
        additional_context,
    )
