"""Base settings class shared by the CRM services.

Subclasses declare their own ``model_config`` (env prefix, .env file) and
service-specific fields; environment handling lives here.
"""

from __future__ import annotations

from crm_common_core.config_enums import Environment
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SecureServiceSettings(BaseSettings):
    """Common settings with environment helpers."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    SERVICE_NAME: str = "crm-service"

    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias="ENVIRONMENT",
        description="Runtime environment for the service",
    )

    def is_development(self) -> bool:
        return self.ENVIRONMENT in (Environment.DEVELOPMENT, Environment.TESTING)
