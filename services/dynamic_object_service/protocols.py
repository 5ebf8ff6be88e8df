"""Protocol definitions for the Dynamic Object Service.

Defines interfaces for the vendor request builders and the collaborators
used in dependency injection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol
from uuid import UUID

from crm_common_core.config_enums import CRMProviderType

if TYPE_CHECKING:
    from services.dynamic_object_service.api_models import (
        CreateOrUpdateDynamicObjectResponse,
        GetDynamicObjectResponse,
        GetDynamicObjectsResponse,
        ListQuery,
    )
    from services.dynamic_object_service.internal_models import (
        Account,
        Connection,
        FieldMapping,
        ProviderPage,
    )


class CRMProviderProtocol(Protocol):
    """Builds and sends the vendor-specific REST calls for one CRM.

    Methods return raw vendor records (already merged into a flat dict
    where the vendor nests properties), not unified objects.
    """

    provider_type: CRMProviderType
    display_name: str

    async def get_object(
        self,
        connection: Connection,
        object_type: str,
        object_id: str,
        correlation_id: UUID,
        *,
        fields: str | None = None,
        associations: list[str] | None = None,
    ) -> dict[str, Any]: ...

    async def list_objects(
        self,
        connection: Connection,
        object_type: str,
        query: ListQuery,
        correlation_id: UUID,
    ) -> ProviderPage: ...

    async def create_object(
        self,
        connection: Connection,
        object_type: str,
        data: dict[str, Any],
        correlation_id: UUID,
    ) -> dict[str, Any]: ...

    async def update_object(
        self,
        connection: Connection,
        object_type: str,
        object_id: str,
        data: dict[str, Any],
        correlation_id: UUID,
    ) -> dict[str, Any]: ...


class FieldMappingStoreProtocol(Protocol):
    """Source of tenant schema field mappings."""

    def get_field_mappings(
        self,
        schema_mapping_id: str | None,
        object_type: str,
        provider: CRMProviderType,
    ) -> list[FieldMapping]:
        """Return the mappings for one object type and provider (empty if none)."""
        ...


class UnifierProtocol(Protocol):
    """Maps vendor-native records onto the canonical schema."""

    async def unify(
        self,
        obj: dict[str, Any],
        *,
        provider: CRMProviderType,
        object_type: str,
        schema_mapping_id: str | None,
        account: Account,
    ) -> dict[str, Any]: ...


class AssociationResolverProtocol(Protocol):
    """Fetches and unifies records associated with a vendor record."""

    async def resolve(
        self,
        associations: dict[str, Any] | None,
        connection: Connection,
    ) -> dict[str, list[dict[str, Any]]]: ...


class ConnectionRepositoryProtocol(Protocol):
    """Looks up the stored CRM connection of a tenant."""

    async def get_connection(self, tenant_id: str, correlation_id: UUID) -> Connection:
        """Return the tenant's connection.

        Raises:
            CRMServiceError: RESOURCE_NOT_FOUND when the tenant has no connection
        """
        ...


class DynamicObjectServiceProtocol(Protocol):
    """Unified CRUD over dynamic CRM objects."""

    async def get_object(
        self,
        connection: Connection,
        object_type: str,
        object_id: str,
        correlation_id: UUID,
        *,
        fields: str | None = None,
        associations: list[str] | None = None,
    ) -> GetDynamicObjectResponse: ...

    async def list_objects(
        self,
        connection: Connection,
        object_type: str,
        query: ListQuery,
        correlation_id: UUID,
    ) -> GetDynamicObjectsResponse: ...

    async def create_object(
        self,
        connection: Connection,
        object_type: str,
        data: dict[str, Any],
        correlation_id: UUID,
    ) -> CreateOrUpdateDynamicObjectResponse: ...

    async def update_object(
        self,
        connection: Connection,
        object_type: str,
        object_id: str,
        data: dict[str, Any],
        correlation_id: UUID,
    ) -> CreateOrUpdateDynamicObjectResponse: ...
