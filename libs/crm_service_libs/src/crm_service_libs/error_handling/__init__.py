"""Error handling utilities for CRM services."""

from .crm_error import CRMServiceError
from .factories import (
    create_error_detail,
    raise_authentication_error,
    raise_configuration_error,
    raise_resource_not_found,
    raise_unknown_error,
    raise_validation_error,
)

__all__ = [
    "CRMServiceError",
    "create_error_detail",
    "raise_authentication_error",
    "raise_configuration_error",
    "raise_resource_not_found",
    "raise_unknown_error",
    "raise_validation_error",
]
