"""Configuration utilities for CRM services."""

from .secure_base import SecureServiceSettings

__all__ = ["SecureServiceSettings"]
