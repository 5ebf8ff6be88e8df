"""Microsoft Dynamics 365 Sales Web API (OData v4)."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from crm_common_core.config_enums import CRMProviderType

from services.dynamic_object_service.api_models import ListQuery
from services.dynamic_object_service.implementations.pagination import (
    ms_dynamics_cursor_params,
    ms_dynamics_cursors,
)
from services.dynamic_object_service.implementations.providers.base import BaseCRMProvider
from services.dynamic_object_service.internal_models import Connection, ProviderPage

ODATA_HEADERS = {
    "OData-MaxVersion": "4.0",
    "OData-Version": "4.0",
    "Accept": "application/json",
}


class MSDynamicsProviderImpl(BaseCRMProvider):
    """Entity sets are the pluralized logical name; single records use ``set(id)``."""

    provider_type = CRMProviderType.MS_DYNAMICS_365_SALES
    display_name = "MS Dynamics 365"

    def _entity_set_url(self, connection: Connection, object_type: str, correlation_id: UUID) -> str:
        org_url = self._account_url(connection, correlation_id)
        return f"{org_url}/api/data/{self._settings.MS_DYNAMICS_API_VERSION}/{object_type}s"

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
        params = {"$select": fields} if fields else None
        record = await self._send(
            "GET",
            f"{self._entity_set_url(connection, object_type, correlation_id)}({object_id})",
            connection,
            params=params,
            headers=ODATA_HEADERS,
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
        if query.fields:
            params["$select"] = query.fields
        # the nextLink already repeats $select, so its params win
        params.update(ms_dynamics_cursor_params(query.cursor))

        headers = dict(ODATA_HEADERS)
        if query.page_size:
            headers["Prefer"] = f"odata.maxpagesize={query.page_size}"

        payload = await self._send(
            "GET",
            self._entity_set_url(connection, object_type, correlation_id),
            connection,
            params=params,
            headers=headers,
        )

        next_cursor, previous_cursor = ms_dynamics_cursors(payload)
        return ProviderPage(
            results=payload.get("value") or [], next=next_cursor, previous=previous_cursor
        )

    async def create_object(
        self,
        connection: Connection,
        object_type: str,
        data: dict[str, Any],
        correlation_id: UUID,
    ) -> dict[str, Any]:
        return await self._send(
            "POST",
            self._entity_set_url(connection, object_type, correlation_id),
            connection,
            json=data,
            headers={
                **ODATA_HEADERS,
                "Content-Type": "application/json",
                "Prefer": "return=representation",
            },
        )

    async def update_object(
        self,
        connection: Connection,
        object_type: str,
        object_id: str,
        data: dict[str, Any],
        correlation_id: UUID,
    ) -> dict[str, Any]:
        url = f"{self._entity_set_url(connection, object_type, correlation_id)}({object_id})"
        await self._send(
            "PATCH",
            url,
            connection,
            json=data,
            headers={**ODATA_HEADERS, "Content-Type": "application/json"},
        )
        # PATCH answers 204 with no body
        return await self._send("GET", url, connection, headers=ODATA_HEADERS)
