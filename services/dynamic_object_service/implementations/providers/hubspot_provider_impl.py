"""HubSpot CRM v3 objects API."""

from __future__ import annotations

import asyncio
from typing import Any
from uuid import UUID

import httpx
from crm_common_core.config_enums import CRMProviderType

from services.dynamic_object_service.api_models import ListQuery
from services.dynamic_object_service.config import Settings
from services.dynamic_object_service.implementations.providers.hubspot_associations import (
    filter_valid_associations,
)
from services.dynamic_object_service.implementations.pagination import hubspot_cursors
from services.dynamic_object_service.implementations.providers.base import BaseCRMProvider
from services.dynamic_object_service.internal_models import Connection, ProviderPage
from services.dynamic_object_service.protocols import AssociationResolverProtocol


def _split_fields(fields: str | None) -> str | None:
    if not fields:
        return None
    return ",".join(f.strip() for f in fields.split(",") if f.strip())


class HubSpotProviderImpl(BaseCRMProvider):
    provider_type = CRMProviderType.HUBSPOT
    display_name = "Hubspot"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: Settings,
        association_resolver: AssociationResolverProtocol,
    ) -> None:
        super().__init__(http_client, settings)
        self._associations = association_resolver

    def _objects_url(self, object_type: str) -> str:
        return f"{self._settings.HUBSPOT_API_BASE_URL}/crm/v3/objects/{object_type}"

    @staticmethod
    def _read_params(fields: str | None, associations: list[str] | None) -> dict[str, Any]:
        params: dict[str, Any] = {}
        properties = _split_fields(fields)
        if properties:
            params["properties"] = properties
        valid_associations = filter_valid_associations(associations or [])
        if valid_associations:
            params["associations"] = ",".join(valid_associations)
        return params

    async def _flatten(self, record: dict[str, Any], connection: Connection) -> dict[str, Any]:
        """Merge ``properties`` into the record and attach unified associations."""
        associated = await self._associations.resolve(record.get("associations"), connection)
        return {**record, **(record.get("properties") or {}), "associations": associated}

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
        record = await self._send(
            "GET",
            f"{self._objects_url(object_type)}/{object_id}",
            connection,
            params=self._read_params(fields, associations),
        )
        record = self._require_record(record, connection, object_type, object_id, correlation_id)
        return await self._flatten(record, connection)

    async def list_objects(
        self,
        connection: Connection,
        object_type: str,
        query: ListQuery,
        correlation_id: UUID,
    ) -> ProviderPage:
        params = self._read_params(query.fields, query.associations)
        if query.page_size:
            params["limit"] = query.page_size
        if query.cursor:
            params["after"] = query.cursor

        payload = await self._send("GET", self._objects_url(object_type), connection, params=params)

        results = await asyncio.gather(
            *(self._flatten(record, connection) for record in payload.get("results") or [])
        )
        next_cursor, previous_cursor = hubspot_cursors(payload)
        return ProviderPage(results=list(results), next=next_cursor, previous=previous_cursor)

    async def create_object(
        self,
        connection: Connection,
        object_type: str,
        data: dict[str, Any],
        correlation_id: UUID,
    ) -> dict[str, Any]:
        record = await self._send(
            "POST",
            self._objects_url(object_type),
            connection,
            json={"properties": data},
        )
        return {**record, **(record.get("properties") or {})}

    async def update_object(
        self,
        connection: Connection,
        object_type: str,
        object_id: str,
        data: dict[str, Any],
        correlation_id: UUID,
    ) -> dict[str, Any]:
        record = await self._send(
            "PATCH",
            f"{self._objects_url(object_type)}/{object_id}",
            connection,
            json={"properties": data},
        )
        return {**record, **(record.get("properties") or {})}
