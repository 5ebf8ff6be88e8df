"""Salesforce REST API (sObjects and SOQL query)."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from crm_common_core.config_enums import CRMProviderType

from services.dynamic_object_service.api_models import ListQuery
from services.dynamic_object_service.implementations.pagination import (
    salesforce_cursors,
    salesforce_paging_clause,
)
from services.dynamic_object_service.implementations.providers.base import BaseCRMProvider
from services.dynamic_object_service.internal_models import Connection, ProviderPage


def build_soql(object_type: str, fields: str | None, paging_clause: str) -> str:
    """SELECT statement for a list call; no field list (or ALL) selects every field."""
    if not fields or fields == "ALL":
        select = "fields(all)"
    else:
        select = ", ".join(f.strip() for f in fields.split(",") if f.strip())
    return f"SELECT {select} FROM {object_type} {paging_clause}"


class SalesforceProviderImpl(BaseCRMProvider):
    provider_type = CRMProviderType.SALESFORCE
    display_name = "Salesforce"

    def _data_url(self, connection: Connection, correlation_id: UUID) -> str:
        instance_url = self._account_url(connection, correlation_id)
        return f"{instance_url}/services/data/{self._settings.SALESFORCE_API_VERSION}"

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
        params = {"fields": fields} if fields and fields != "ALL" else None
        record = await self._send(
            "GET",
            f"{self._data_url(connection, correlation_id)}/sobjects/{object_type}/{object_id}",
            connection,
            params=params,
        )
        return self._require_record(record, connection, object_type, object_id, correlation_id)

    async def list_objects(
        self,
        connection: Connection,
        object_type: str,
        query: ListQuery,
        correlation_id: UUID,
    ) -> ProviderPage:
        paging_clause = salesforce_paging_clause(
            query.page_size, query.cursor, self._settings.SALESFORCE_DEFAULT_LIMIT
        )
        soql = build_soql(object_type, query.fields, paging_clause)

        payload = await self._send(
            "GET",
            f"{self._data_url(connection, correlation_id)}/query/",
            connection,
            params={"q": soql},
        )

        next_cursor, previous_cursor = salesforce_cursors(payload, query.page_size, query.cursor)
        return ProviderPage(
            results=payload.get("records") or [], next=next_cursor, previous=previous_cursor
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
            f"{self._data_url(connection, correlation_id)}/sobjects/{object_type}/",
            connection,
            json=data,
        )

    async def update_object(
        self,
        connection: Connection,
        object_type: str,
        object_id: str,
        data: dict[str, Any],
        correlation_id: UUID,
    ) -> dict[str, Any]:
        url = f"{self._data_url(connection, correlation_id)}/sobjects/{object_type}/{object_id}"
        await self._send("PATCH", url, connection, json=data)
        # PATCH answers 204 with no body
        return await self._send("GET", url, connection)
