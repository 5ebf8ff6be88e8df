"""
Core exception type for the CRM services.

CRMServiceError carries an immutable ErrorDetail and records itself on the
active OpenTelemetry span when it is created.
"""

from __future__ import annotations

from typing import Any

from crm_common_core.models.error_models import ErrorDetail
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

_PRIMITIVE_TYPES = (str, bool, int, float)


class CRMServiceError(Exception):
    """Application error with structured detail.

    Anything raised as a CRMServiceError is considered a recognized error and
    is passed through to the caller unchanged by the service layers.
    """

    def __init__(self, error_detail: ErrorDetail) -> None:
        self.error_detail = error_detail
        super().__init__(f"[{error_detail.error_code.value}] {error_detail.message}")
        self._record_to_span()

    @property
    def correlation_id(self) -> str:
        return str(self.error_detail.correlation_id)

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def service(self) -> str:
        return self.error_detail.service

    @property
    def operation(self) -> str:
        return self.error_detail.operation

    def _record_to_span(self) -> None:
        span = trace.get_current_span()
        if span is None or not span.is_recording():
            return

        span.record_exception(self)
        span.set_status(Status(StatusCode.ERROR, self.error_detail.message))
        span.set_attribute("error", True)
        span.set_attribute("error.code", self.error_code)
        span.set_attribute("error.message", self.error_detail.message)
        span.set_attribute("error.service", self.service)
        span.set_attribute("error.operation", self.operation)
        span.set_attribute("correlation_id", self.correlation_id)

        for key, value in self.error_detail.details.items():
            attr_value = value if isinstance(value, _PRIMITIVE_TYPES) else str(value)
            span.set_attribute(f"error.details.{key}", attr_value)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging and transport."""
        return {
            "error": str(self),
            "error_detail": self.error_detail.model_dump(mode="json"),
        }

    def add_detail(self, key: str, value: Any) -> CRMServiceError:
        """Return a new error with an extra detail entry; the original is untouched."""
        details = {**self.error_detail.details, key: value}
        return CRMServiceError(self.error_detail.model_copy(update={"details": details}))

    def __repr__(self) -> str:
        return (
            f"CRMServiceError(code={self.error_code}, "
            f"message={self.error_detail.message!r}, "
            f"service={self.service}, operation={self.operation}, "
            f"correlation_id={self.correlation_id})"
        )
