"""
CRM Service Libraries Package.

Shared infrastructure used by the CRM integration services: structured
logging, the error handling framework and the settings base class.
"""

from .error_handling import CRMServiceError
from .logging_utils import configure_service_logging, create_service_logger

__all__ = [
    "CRMServiceError",
    "configure_service_logging",
    "create_service_logger",
]
