"""Shared request plumbing for the vendor request builders."""

from __future__ import annotations

from typing import Any
from uuid import UUID

import httpx
from crm_common_core.config_enums import CRMProviderType
from crm_service_libs.error_handling import raise_configuration_error, raise_resource_not_found
from crm_service_libs.logging_utils import create_service_logger

from services.dynamic_object_service.config import Settings
from services.dynamic_object_service.internal_models import Connection

logger = create_service_logger("dynamic_object_service.providers")


class BaseCRMProvider:
    """Sends authenticated JSON requests to one vendor API.

    HTTP errors are raised as ``httpx.HTTPStatusError`` and left to the
    dispatcher, which treats them as unrecognized failures.
    """

    provider_type: CRMProviderType
    display_name: str
    auth_scheme = "Bearer"

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = http_client
        self._settings = settings

    def _headers(self, connection: Connection, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = {"Authorization": f"{self.auth_scheme} {connection.access_token}"}
        if extra:
            headers.update(extra)
        return headers

    def _account_url(self, connection: Connection, correlation_id: UUID) -> str:
        """Per-connection API host (instance URL / company domain / org URL)."""
        if not connection.tp_account_url:
            raise_configuration_error(
                service="dynamic_object_service",
                operation=f"{self.provider_type.value}_account_url",
                config_key="tp_account_url",
                message=f"Connection for {self.display_name} has no account URL",
                correlation_id=correlation_id,
                tenant_id=connection.tenant_id,
            )
        return connection.tp_account_url.rstrip("/")

    def _require_record(
        self,
        record: Any,
        connection: Connection,
        object_type: str,
        object_id: str,
        correlation_id: UUID,
    ) -> dict[str, Any]:
        """A single-record read that came back empty (204, ``data: []``) is a 404."""
        if not record:
            raise_resource_not_found(
                service="dynamic_object_service",
                operation=f"{self.provider_type.value}_get_object",
                resource_type=object_type,
                resource_id=object_id,
                correlation_id=correlation_id,
                message=f"{object_type} '{object_id}' not found in {self.display_name}",
                tenant_id=connection.tenant_id,
            )
        return record

    async def _send(
        self,
        method: str,
        url: str,
        connection: Connection,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send the request and return the decoded JSON body ({} when empty)."""
        response = await self._client.request(
            method,
            url,
            params=params,
            json=json,
            headers=self._headers(connection, headers),
        )

        logger.debug(
            "Vendor API call completed",
            provider=self.provider_type.value,
            method=method,
            url=url,
            status_code=response.status_code,
        )

        response.raise_for_status()
        if not response.content:
            return {}
        return response.json()
