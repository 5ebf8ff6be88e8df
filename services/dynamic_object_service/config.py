"""Configuration for the Dynamic Object Service.

Uses Pydantic settings for environment-based configuration.
"""

from __future__ import annotations

from pathlib import Path

from crm_common_core.config_enums import Environment
from crm_service_libs.config import SecureServiceSettings
from pydantic import Field
from pydantic_settings import SettingsConfigDict


class Settings(SecureServiceSettings):
    """Configuration settings for the Dynamic Object Service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DYNAMIC_OBJECT_SERVICE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Service identity
    SERVICE_NAME: str = "dynamic-object-service"

    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias="ENVIRONMENT",
        description="Runtime environment for the service",
    )

    # HTTP server configuration
    HOST: str = Field(default="0.0.0.0", description="HTTP server host")
    PORT: int = Field(default=4120, description="HTTP server port")

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # Outbound HTTP client configuration
    HTTP_CLIENT_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="Vendor API request timeout in seconds",
    )
    HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Vendor API connection timeout in seconds",
    )

    # Vendor endpoints with a fixed host. Salesforce, Pipedrive and
    # MS Dynamics use the per-connection account URL instead.
    HUBSPOT_API_BASE_URL: str = Field(default="https://api.hubapi.com")
    ZOHO_API_BASE_URL: str = Field(default="https://www.zohoapis.com")
    CLOSE_API_BASE_URL: str = Field(default="https://api.close.com")

    SALESFORCE_API_VERSION: str = Field(default="v56.0")
    SALESFORCE_DEFAULT_LIMIT: int = Field(
        default=200,
        description="SOQL LIMIT used when a list call sends neither pageSize nor cursor",
    )
    MS_DYNAMICS_API_VERSION: str = Field(default="v9.2")

    # File-backed collaborators
    CONNECTIONS_FILE: Path = Field(
        default=Path("/app/config/connections.json"),
        description="JSON document mapping tenant ids to stored CRM connections",
    )
    FIELD_MAPPINGS_FILE: Path = Field(
        default=Path("/app/config/field_mappings.json"),
        description="JSON document with schema field mappings used for unification",
    )


# Global settings instance
settings = Settings()
