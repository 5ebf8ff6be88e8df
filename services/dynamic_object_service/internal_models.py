"""Internal models for the Dynamic Object Service.

These never leave the service: stored connections, field mappings and the
provider-level page shape used between the request builders and the
dispatcher.
"""

from __future__ import annotations

from typing import Any

from crm_common_core.config_enums import CRMProviderType
from pydantic import BaseModel, ConfigDict, Field, SecretStr


class AccountFieldMappingConfig(BaseModel):
    """Per-account field mapping overrides.

    ``overrides`` is keyed by object type, then by canonical target field,
    and names the vendor source field to read instead of the schema default.
    """

    overrides: dict[str, dict[str, str]] = Field(default_factory=dict)

    def for_object(self, object_type: str) -> dict[str, str]:
        return self.overrides.get(object_type, {})


class Account(BaseModel):
    id: str
    field_mapping_config: AccountFieldMappingConfig = Field(
        default_factory=AccountFieldMappingConfig
    )


class Connection(BaseModel):
    """A tenant's stored link to one third-party CRM."""

    model_config = ConfigDict(frozen=True)

    tenant_id: str
    tp_id: CRMProviderType
    tp_access_token: SecretStr
    tp_account_url: str | None = None
    schema_mapping_id: str | None = None
    account: Account

    @property
    def access_token(self) -> str:
        return self.tp_access_token.get_secret_value()


class FieldMapping(BaseModel):
    """Maps one vendor field onto one canonical field."""

    model_config = ConfigDict(frozen=True)

    source_field: str
    target_field: str
    value_map: dict[str, Any] | None = None


class ProviderPage(BaseModel):
    """One page of raw vendor records with normalized cursors."""

    results: list[dict[str, Any]] = Field(default_factory=list)
    next: str | None = None
    previous: str | None = None
