"""Pipedrive API v1."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from crm_common_core.config_enums import CRMProviderType

from services.dynamic_object_service.api_models import ListQuery
from services.dynamic_object_service.implementations.pagination import pipedrive_cursors
from services.dynamic_object_service.implementations.providers.base import BaseCRMProvider
from services.dynamic_object_service.internal_models import Connection, ProviderPage


class PipedriveProviderImpl(BaseCRMProvider):
    """Pipedrive endpoints are the pluralized object type under the company domain."""

    provider_type = CRMProviderType.PIPEDRIVE
    display_name = "Pipedrive"

    def _collection_url(self, connection: Connection, object_type: str, correlation_id: UUID) -> str:
        return f"{self._account_url(connection, correlation_id)}/v1/{object_type}s"

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
        payload = await self._send(
            "GET",
            f"{self._collection_url(connection, object_type, correlation_id)}/{object_id}",
            connection,
        )
        return self._require_record(
            payload.get("data"), connection, object_type, object_id, correlation_id
        )

    async def list_objects(
        self,
        connection: Connection,
        object_type: str,
        query: ListQuery,
        correlation_id: UUID,
    ) -> ProviderPage:
        params: dict[str, Any] = {}
        if query.page_size:
            params["limit"] = query.page_size
        if query.cursor:
            params["start"] = query.cursor

        payload = await self._send(
            "GET",
            self._collection_url(connection, object_type, correlation_id),
            connection,
            params=params,
        )

        next_cursor, previous_cursor = pipedrive_cursors(payload)
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
            "POST",
            self._collection_url(connection, object_type, correlation_id),
            connection,
            json=data,
        )
        return payload.get("data") or {}

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
            f"{self._collection_url(connection, object_type, correlation_id)}/{object_id}",
            connection,
            json=data,
        )
        return payload.get("data") or {}
