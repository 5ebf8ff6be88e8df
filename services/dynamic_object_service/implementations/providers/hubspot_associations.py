"""HubSpot association handling.

HubSpot returns associations as ``{type: {"results": [{"id": ..}, ..]}}``.
Only standard object types may be requested as associations; the
associated records are batch-read and unified under their own type.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
from crm_common_core.config_enums import CRMProviderType
from crm_service_libs.logging_utils import create_service_logger

from services.dynamic_object_service.config import Settings
from services.dynamic_object_service.implementations.providers.base import BaseCRMProvider
from services.dynamic_object_service.internal_models import Connection
from services.dynamic_object_service.protocols import UnifierProtocol

logger = create_service_logger("dynamic_object_service.hubspot_associations")

VALID_ASSOCIATION_TYPES = frozenset(
    {
        "contacts",
        "companies",
        "deals",
        "notes",
        "tasks",
        "meetings",
        "calls",
        "emails",
        "tickets",
        "line_items",
        "products",
        "quotes",
    }
)


def is_valid_association_type(association_type: str) -> bool:
    return association_type in VALID_ASSOCIATION_TYPES


def filter_valid_associations(associations: list[str]) -> list[str]:
    """Requested association types that HubSpot may be asked for, order kept."""
    return [item for item in associations if is_valid_association_type(item)]


def _associated_ids(entry: Any) -> list[str]:
    if not isinstance(entry, dict):
        return []
    ids: list[str] = []
    for item in entry.get("results") or []:
        item_id = item.get("id") if isinstance(item, dict) else None
        if item_id is not None and str(item_id) not in ids:
            ids.append(str(item_id))
    return ids


class HubSpotAssociationResolver(BaseCRMProvider):
    """Batch-reads associated HubSpot records and unifies them."""

    provider_type = CRMProviderType.HUBSPOT
    display_name = "Hubspot"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: Settings,
        unifier: UnifierProtocol,
    ) -> None:
        super().__init__(http_client, settings)
        self._unifier = unifier

    async def resolve(
        self,
        associations: dict[str, Any] | None,
        connection: Connection,
    ) -> dict[str, list[dict[str, Any]]]:
        if not associations:
            return {}

        requests = {
            association_type: ids
            for association_type, entry in associations.items()
            if is_valid_association_type(association_type) and (ids := _associated_ids(entry))
        }
        if not requests:
            return {}

        resolved = await asyncio.gather(
            *(
                self._read_batch(association_type, ids, connection)
                for association_type, ids in requests.items()
            )
        )
        return dict(zip(requests.keys(), resolved))

    async def _read_batch(
        self,
        association_type: str,
        ids: list[str],
        connection: Connection,
    ) -> list[dict[str, Any]]:
        payload = await self._send(
            "POST",
            f"{self._settings.HUBSPOT_API_BASE_URL}/crm/v3/objects/{association_type}/batch/read",
            connection,
            json={"inputs": [{"id": item_id} for item_id in ids]},
        )

        records = payload.get("results") or []
        logger.debug(
            "Resolved HubSpot associations",
            association_type=association_type,
            requested=len(ids),
            returned=len(records),
        )

        return list(
            await asyncio.gather(
                *(
                    self._unifier.unify(
                        {**record, **(record.get("properties") or {})},
                        provider=CRMProviderType.HUBSPOT,
                        object_type=association_type,
                        schema_mapping_id=connection.schema_mapping_id,
                        account=connection.account,
                    )
                    for record in records
                )
            )
        )
