"""Connection repository backed by a JSON document keyed by tenant id."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from uuid import UUID

from crm_service_libs.error_handling import raise_resource_not_found
from crm_service_libs.logging_utils import create_service_logger

from services.dynamic_object_service.internal_models import Connection

logger = create_service_logger("dynamic_object_service.connection_repository")


class FileConnectionRepository:
    """Read-only tenant connections parsed once at construction."""

    def __init__(self, document: dict[str, dict[str, Any]]) -> None:
        self._connections = {
            tenant_id: Connection.model_validate({**raw, "tenant_id": tenant_id})
            for tenant_id, raw in document.items()
        }

    @classmethod
    def from_file(cls, path: Path) -> FileConnectionRepository:
        if not path.exists():
            logger.warning("Connections file not found, no tenants configured", path=str(path))
            return cls({})
        with path.open("r", encoding="utf-8") as f:
            document = json.load(f)
        logger.info("Loaded tenant connections", path=str(path), tenants=len(document))
        return cls(document)

    async def get_connection(self, tenant_id: str, correlation_id: UUID) -> Connection:
        connection = self._connections.get(tenant_id)
        if connection is None:
            raise_resource_not_found(
                service="dynamic_object_service",
                operation="get_connection",
                resource_type="Connection",
                resource_id=tenant_id,
                correlation_id=correlation_id,
            )
        return connection
