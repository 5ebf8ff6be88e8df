"""Dispatcher for unified CRUD on dynamic CRM objects."""

from __future__ import annotations

import asyncio
from typing import Any, NoReturn
from uuid import UUID

import httpx
from crm_common_core.config_enums import CRMProviderType
from crm_service_libs.error_handling import (
    CRMServiceError,
    raise_resource_not_found,
    raise_unknown_error,
)
from crm_service_libs.logging_utils import create_service_logger

from services.dynamic_object_service.api_models import (
    CreateOrUpdateDynamicObjectResponse,
    GetDynamicObjectResponse,
    GetDynamicObjectsResponse,
    ListQuery,
)
from services.dynamic_object_service.internal_models import Connection
from services.dynamic_object_service.protocols import CRMProviderProtocol, UnifierProtocol

logger = create_service_logger("dynamic_object_service.dispatcher")

SERVICE_NAME = "dynamic_object_service"


class DynamicObjectServiceImpl:
    """Selects the provider by the connection's ``tp_id`` and unifies results.

    Recognized application errors (CRMServiceError) propagate unchanged.
    Anything else, including vendor HTTP failures, is logged and replaced by
    a generic internal error.
    """

    def __init__(
        self,
        providers: dict[CRMProviderType, CRMProviderProtocol],
        unifier: UnifierProtocol,
    ) -> None:
        self._providers = providers
        self._unifier = unifier

    def _provider_for(
        self, connection: Connection, operation: str, correlation_id: UUID
    ) -> CRMProviderProtocol:
        provider = self._providers.get(connection.tp_id)
        if provider is None:
            raise_resource_not_found(
                service=SERVICE_NAME,
                operation=operation,
                resource_type="CRM",
                resource_id=str(connection.tp_id.value),
                correlation_id=correlation_id,
                message="Unrecognized CRM",
            )
        return provider

    async def _unify(
        self, obj: dict[str, Any], connection: Connection, object_type: str
    ) -> dict[str, Any]:
        return await self._unifier.unify(
            obj,
            provider=connection.tp_id,
            object_type=object_type,
            schema_mapping_id=connection.schema_mapping_id,
            account=connection.account,
        )

    def _internal_error(
        self,
        exc: Exception,
        log_message: str,
        operation: str,
        connection: Connection,
        object_type: str,
        correlation_id: UUID,
    ) -> NoReturn:
        context: dict[str, Any] = {
            "provider": connection.tp_id.value,
            "object_type": object_type,
            "error_type": type(exc).__name__,
        }
        if isinstance(exc, httpx.HTTPStatusError):
            context["vendor_status_code"] = exc.response.status_code

        logger.error(
            log_message,
            correlation_id=str(correlation_id),
            error=str(exc),
            exc_info=exc,
            **context,
        )
        raise_unknown_error(
            service=SERVICE_NAME,
            operation=operation,
            message="Internal server error",
            correlation_id=correlation_id,
            **context,
        )

    def _log_call(
        self,
        message: str,
        connection: Connection,
        object_type: str,
        correlation_id: UUID,
        object_id: str | None = None,
    ) -> None:
        logger.info(
            message,
            account_id=connection.account.id,
            tenant_id=connection.tenant_id,
            provider=connection.tp_id.value,
            object_type=object_type,
            object_id=object_id,
            correlation_id=str(correlation_id),
        )

    async def get_object(
        self,
        connection: Connection,
        object_type: str,
        object_id: str,
        correlation_id: UUID,
        *,
        fields: str | None = None,
        associations: list[str] | None = None,
    ) -> GetDynamicObjectResponse:
        self._log_call("GET DYNAMIC OBJECT", connection, object_type, correlation_id, object_id)
        try:
            provider = self._provider_for(connection, "get_dynamic_object", correlation_id)
            raw = await provider.get_object(
                connection,
                object_type,
                object_id,
                correlation_id,
                fields=fields,
                associations=associations,
            )
            result = await self._unify(raw, connection, object_type)
            return GetDynamicObjectResponse(result=result)
        except CRMServiceError:
            raise
        except Exception as e:
            self._internal_error(
                e,
                "Could not fetch dynamic object",
                "get_dynamic_object",
                connection,
                object_type,
                correlation_id,
            )

    async def list_objects(
        self,
        connection: Connection,
        object_type: str,
        query: ListQuery,
        correlation_id: UUID,
    ) -> GetDynamicObjectsResponse:
        self._log_call("GET ALL DYNAMIC OBJECTS", connection, object_type, correlation_id)
        try:
            provider = self._provider_for(connection, "get_dynamic_objects", correlation_id)
            page = await provider.list_objects(connection, object_type, query, correlation_id)
            results = await asyncio.gather(
                *(self._unify(obj, connection, object_type) for obj in page.results)
            )
            return GetDynamicObjectsResponse(
                next=page.next,
                previous=page.previous,
                results=list(results),
            )
        except CRMServiceError:
            raise
        except Exception as e:
            self._internal_error(
                e,
                "Could not fetch dynamic objects",
                "get_dynamic_objects",
                connection,
                object_type,
                correlation_id,
            )

    async def create_object(
        self,
        connection: Connection,
        object_type: str,
        data: dict[str, Any],
        correlation_id: UUID,
    ) -> CreateOrUpdateDynamicObjectResponse:
        self._log_call("CREATE DYNAMIC OBJECT", connection, object_type, correlation_id)
        try:
            provider = self._provider_for(connection, "create_dynamic_object", correlation_id)
            raw = await provider.create_object(connection, object_type, data, correlation_id)
            result = await self._unify(raw, connection, object_type)
            return CreateOrUpdateDynamicObjectResponse(
                message=f"{object_type} created in {provider.display_name}",
                result=result,
            )
        except CRMServiceError:
            raise
        except Exception as e:
            self._internal_error(
                e,
                f"Could not create {object_type}",
                "create_dynamic_object",
                connection,
                object_type,
                correlation_id,
            )

    async def update_object(
        self,
        connection: Connection,
        object_type: str,
        object_id: str,
        data: dict[str, Any],
        correlation_id: UUID,
    ) -> CreateOrUpdateDynamicObjectResponse:
        self._log_call("UPDATE DYNAMIC OBJECT", connection, object_type, correlation_id, object_id)
        try:
            provider = self._provider_for(connection, "update_dynamic_object", correlation_id)
            raw = await provider.update_object(
                connection, object_type, object_id, data, correlation_id
            )
            result = await self._unify(raw, connection, object_type)
            return CreateOrUpdateDynamicObjectResponse(
                message=f"{object_type} updated in {provider.display_name}",
                result=result,
            )
        except CRMServiceError:
            raise
        except Exception as e:
            self._internal_error(
                e,
                f"Could not update {object_type}",
                "update_dynamic_object",
                connection,
                object_type,
                correlation_id,
            )
