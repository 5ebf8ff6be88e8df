"""Zoho CRM v3 records API."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from crm_common_core.config_enums import CRMProviderType

from services.dynamic_object_service.api_models import ListQuery
from services.dynamic_object_service.implementations.pagination import zoho_cursors
from services.dynamic_object_service.implementations.providers.base import BaseCRMProvider
from services.dynamic_object_service.internal_models import Connection, ProviderPage


def _first_record(payload: dict[str, Any]) -> dict[str, Any]:
    records = payload.get("data") or []
    return records[0] if records else {}


class ZohoProviderImpl(BaseCRMProvider):
    provider_type = CRMProviderType.ZOHO
    display_name = "Zoho"
    auth_scheme = "Zoho-oauthtoken"

    def _module_url(self, object_type: str) -> str:
        return f"{self._settings.ZOHO_API_BASE_URL}/crm/v3/{object_type}"

    async def get_object(
        self,
        connection: Connection,
        object_type: str,
        object_id: str,
        correlation_id: UUID,
        *,
        fields: str | None = None,
        associations: list[str] | None = None,
    ) -> dict[str, Any]:
        params = {"fields": fields} if fields else None
        payload = await self._send(
            "GET", f"{self._module_url(object_type)}/{object_id}", connection, params=params
        )
        return self._require_record(
            _first_record(payload), connection, object_type, object_id, correlation_id
        )

    async def list_objects(
        self,
        connection: Connection,
        object_type: str,
        query: ListQuery,
        correlation_id: UUID,
    ) -> ProviderPage:
        params: dict[str, Any] = {}
        if query.fields:
            params["fields"] = query.fields
        if query.page_size:
            params["per_page"] = query.page_size
        if query.cursor:
            params["page_token"] = query.cursor

        payload = await self._send("GET", self._module_url(object_type), connection, params=params)

        next_cursor, previous_cursor = zoho_cursors(payload)
        return ProviderPage(
            results=payload.get("data") or [], next=next_cursor, previous=previous_cursor
        )

    async def create_object(
        self,
        connection: Connection,
        object_type: str,
        data: dict[str, Any],
        correlation_id: UUID,
    ) -> dict[str, Any]:
        payload = await self._send(
            "POST", self._module_url(object_type), connection, json={"data": [data]}
        )
        return _first_record(payload)

    async def update_object(
        self,
        connection: Connection,
        object_type: str,
        object_id: str,
        data: dict[str, Any],
        correlation_id: UUID,
    ) -> dict[str, Any]:
        payload = await self._send(
            "PUT",
            f"{self._module_url(object_type)}/{object_id}",
            connection,
            json={"data": [data]},
        )
        return _first_record(payload)
