"""Shared enums and pure data models for the CRM integration services."""

from .config_enums import CRMProviderType, Environment
from .error_enums import ErrorCode
from .models.error_models import ErrorDetail

__all__ = [
    "CRMProviderType",
    "Environment",
    "ErrorCode",
    "ErrorDetail",
]
