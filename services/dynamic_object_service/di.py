"""Dependency Injection providers for the Dynamic Object Service.

Provides Dishka DI container setup with APP-scoped infrastructure
and REQUEST-scoped context providers.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from uuid import UUID, uuid4

import httpx
from crm_common_core.config_enums import CRMProviderType
from crm_service_libs.error_handling import raise_authentication_error
from crm_service_libs.logging_utils import create_service_logger
from dishka import Provider, Scope, from_context, provide
from fastapi import Request

from services.dynamic_object_service.config import Settings, settings
from services.dynamic_object_service.implementations.dynamic_object_service_impl import (
    DynamicObjectServiceImpl,
)
from services.dynamic_object_service.implementations.file_connection_repository_impl import (
    FileConnectionRepository,
)
from services.dynamic_object_service.implementations.file_field_mapping_store_impl import (
    FileFieldMappingStore,
)
from services.dynamic_object_service.implementations.providers.hubspot_associations import (
    HubSpotAssociationResolver,
)
from services.dynamic_object_service.implementations.providers import (
    CloseProviderImpl,
    HubSpotProviderImpl,
    MSDynamicsProviderImpl,
    PipedriveProviderImpl,
    SalesforceProviderImpl,
    ZohoProviderImpl,
)
from services.dynamic_object_service.implementations.unifier_impl import FieldMappingUnifier
from services.dynamic_object_service.internal_models import Connection
from services.dynamic_object_service.protocols import (
    AssociationResolverProtocol,
    ConnectionRepositoryProtocol,
    CRMProviderProtocol,
    DynamicObjectServiceProtocol,
    FieldMappingStoreProtocol,
    UnifierProtocol,
)

logger = create_service_logger("dynamic_object_service.di")


def build_provider_table(
    http_client: httpx.AsyncClient,
    config: Settings,
    association_resolver: AssociationResolverProtocol,
) -> dict[CRMProviderType, CRMProviderProtocol]:
    """One request builder per supported CRM, keyed by connection ``tp_id``."""
    providers: list[CRMProviderProtocol] = [
        HubSpotProviderImpl(http_client, config, association_resolver),
        ZohoProviderImpl(http_client, config),
        SalesforceProviderImpl(http_client, config),
        PipedriveProviderImpl(http_client, config),
        CloseProviderImpl(http_client, config),
        MSDynamicsProviderImpl(http_client, config),
    ]
    return {provider.provider_type: provider for provider in providers}


class DynamicObjectServiceProvider(Provider):
    """Infrastructure provider for the Dynamic Object Service.

    Provides APP-scoped dependencies: config, HTTP client, vendor request
    builders, unification and the stores backing them.
    """

    scope = Scope.APP

    @provide
    def get_config(self) -> Settings:
        """Provide settings singleton."""
        return settings

    @provide(scope=Scope.APP)
    async def get_http_client(self, config: Settings) -> AsyncIterator[httpx.AsyncClient]:
        """Provide shared HTTP client with connection pooling."""
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(
                config.HTTP_CLIENT_TIMEOUT_SECONDS,
                connect=config.HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS,
            )
        ) as client:
            yield client

    @provide(scope=Scope.APP)
    def provide_field_mapping_store(self, config: Settings) -> FieldMappingStoreProtocol:
        return FileFieldMappingStore.from_file(config.FIELD_MAPPINGS_FILE)

    @provide(scope=Scope.APP)
    def provide_unifier(self, mapping_store: FieldMappingStoreProtocol) -> UnifierProtocol:
        return FieldMappingUnifier(mapping_store)

    @provide(scope=Scope.APP)
    def provide_association_resolver(
        self,
        http_client: httpx.AsyncClient,
        config: Settings,
        unifier: UnifierProtocol,
    ) -> AssociationResolverProtocol:
        return HubSpotAssociationResolver(http_client, config, unifier)

    @provide(scope=Scope.APP)
    def provide_crm_providers(
        self,
        http_client: httpx.AsyncClient,
        config: Settings,
        association_resolver: AssociationResolverProtocol,
    ) -> dict[CRMProviderType, CRMProviderProtocol]:
        """Provide the dispatch table of vendor request builders."""
        return build_provider_table(http_client, config, association_resolver)

    @provide(scope=Scope.APP)
    def provide_connection_repository(self, config: Settings) -> ConnectionRepositoryProtocol:
        return FileConnectionRepository.from_file(config.CONNECTIONS_FILE)

    @provide(scope=Scope.APP)
    def provide_dynamic_object_service(
        self,
        crm_providers: dict[CRMProviderType, CRMProviderProtocol],
        unifier: UnifierProtocol,
    ) -> DynamicObjectServiceProtocol:
        """Provide the dispatcher singleton."""
        return DynamicObjectServiceImpl(crm_providers, unifier)


class RequestContextProvider(Provider):
    """Request-scoped provider for correlation and tenant context.

    Extracts the tenant from the X-Tenant-ID header (injected by the
    upstream tenant middleware) and correlation_id from request state (set
    by CorrelationIDMiddleware).
    """

    request = from_context(provides=Request, scope=Scope.REQUEST)

    @provide(scope=Scope.REQUEST)
    def provide_correlation_id(self, request: Request) -> UUID:
        """Provide correlation ID from request state."""
        return getattr(request.state, "correlation_id", uuid4())

    @provide(scope=Scope.REQUEST)
    async def provide_connection(
        self,
        request: Request,
        correlation_id: UUID,
        repository: ConnectionRepositoryProtocol,
    ) -> Connection:
        """Provide the tenant's stored CRM connection.

        Requests without an X-Tenant-ID header are rejected as unauthenticated.
        """
        tenant_id = request.headers.get("X-Tenant-ID")
        if not tenant_id:
            logger.error("Missing X-Tenant-ID header - request bypassed tenant middleware")
            raise_authentication_error(
                service="dynamic_object_service",
                operation="provide_connection",
                message="Missing X-Tenant-ID header - authentication required",
                correlation_id=correlation_id,
            )
        return await repository.get_connection(tenant_id, correlation_id)
