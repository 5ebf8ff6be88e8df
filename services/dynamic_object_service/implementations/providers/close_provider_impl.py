"""Close CRM API v1."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from crm_common_core.config_enums import CRMProviderType

from services.dynamic_object_service.api_models import ListQuery
from services.dynamic_object_service.implementations.pagination import (
    close_cursors,
    parse_offset,
)
from services.dynamic_object_service.implementations.providers.base import BaseCRMProvider
from services.dynamic_object_service.internal_models import Connection, ProviderPage

_ACCEPT_JSON = {"Accept": "application/json"}


class CloseProviderImpl(BaseCRMProvider):
    provider_type = CRMProviderType.CLOSE
    display_name = "Close CRM"

    def _resource_url(self, object_type: str) -> str:
        return f"{self._settings.CLOSE_API_BASE_URL}/api/v1/{object_type}"

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
        params = {"_fields": fields} if fields else None
        record = await self._send(
            "GET",
            f"{self._resource_url(object_type)}/{object_id}/",
            connection,
            params=params,
            headers=_ACCEPT_JSON,
        )
        return self._require_record(record, connection, object_type, object_id, correlation_id)

    async def list_objects(
        self,
        connection: Connection,
        object_type: str,
        query: ListQuery,
        correlation_id: UUID,
    ) -> ProviderPage:
        params: dict[str, Any] = {}
        if query.page_size:
            params["_limit"] = query.page_size
        if parse_offset(query.cursor):
            params["_skip"] = parse_offset(query.cursor)

        payload = await self._send(
            "GET",
            f"{self._resource_url(object_type)}/",
            connection,
            params=params,
            headers=_ACCEPT_JSON,
        )

        records = payload.get("data") or []
        next_cursor, previous_cursor = close_cursors(
            payload, query.page_size, query.cursor, returned=len(records)
        )
        return ProviderPage(results=records, next=next_cursor, previous=previous_cursor)

    async def create_object(
        self,
        connection: Connection,
        object_type: str,
        data: dict[str, Any],
        correlation_id: UUID,
    ) -> dict[str, Any]:
        return await self._send(
            "POST",
            f"{self._resource_url(object_type)}/",
            connection,
            json=data,
            headers=_ACCEPT_JSON,
        )

    async def update_object(
        self,
        connection: Connection,
        object_type: str,
        object_id: str,
        data: dict[str, Any],
        correlation_id: UUID,
    ) -> dict[str, Any]:
        return await self._send(
            "PUT",
            f"{self._resource_url(object_type)}/{object_id}",
            connection,
            json=data,
            headers=_ACCEPT_JSON,
        )
