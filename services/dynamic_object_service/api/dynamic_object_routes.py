"""Dynamic object CRUD routes.

One set of endpoints for every CRM; the tenant's connection decides which
vendor the call is dispatched to.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from crm_service_libs.error_handling import raise_validation_error
from crm_service_libs.logging_utils import create_service_logger
from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Body, Query

from services.dynamic_object_service.api_models import (
    CreateOrUpdateDynamicObjectResponse,
    GetDynamicObjectResponse,
    GetDynamicObjectsResponse,
    ListQuery,
)
from services.dynamic_object_service.internal_models import Connection
from services.dynamic_object_service.protocols import DynamicObjectServiceProtocol

router = APIRouter()
logger = create_service_logger("dynamic_object_service.routes")


def split_csv(value: str | None) -> list[str]:
    """``"a, b,,c"`` -> ``["a", "b", "c"]``."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_page_size(raw: str | None, correlation_id: UUID) -> int | None:
    if raw is None or raw == "":
        return None
    try:
        page_size = int(raw)
    except ValueError:
        page_size = 0
    if page_size <= 0:
        raise_validation_error(
            service="dynamic_object_service",
            operation="get_dynamic_objects",
            field="pageSize",
            message="pageSize must be a positive integer",
            correlation_id=correlation_id,
            value=raw,
        )
    return page_size


@router.get("/{object_type}/{object_id}", response_model=GetDynamicObjectResponse)
@inject
async def get_dynamic_object(
    object_type: str,
    object_id: str,
    service: FromDishka[DynamicObjectServiceProtocol],
    connection: FromDishka[Connection],
    correlation_id: FromDishka[UUID],
    fields: str | None = Query(None, description="Comma separated vendor field names"),
    associations: str | None = Query(None, description="Comma separated association types"),
) -> GetDynamicObjectResponse:
    """Fetch one record by id."""
    return await service.get_object(
        connection,
        object_type,
        object_id,
        correlation_id,
        fields=fields,
        associations=split_csv(associations),
    )


@router.get("/{object_type}", response_model=GetDynamicObjectsResponse)
@inject
async def get_dynamic_objects(
    object_type: str,
    service: FromDishka[DynamicObjectServiceProtocol],
    connection: FromDishka[Connection],
    correlation_id: FromDishka[UUID],
    fields: str | None = Query(None, description="Comma separated vendor field names"),
    page_size: str | None = Query(None, alias="pageSize", description="Records per page"),
    cursor: str | None = Query(None, description="Opaque cursor from a previous page"),
    associations: str | None = Query(None, description="Comma separated association types"),
) -> GetDynamicObjectsResponse:
    """Fetch one page of records."""
    query = ListQuery(
        fields=fields,
        page_size=parse_page_size(page_size, correlation_id),
        cursor=cursor or None,
        associations=split_csv(associations),
    )
    return await service.list_objects(connection, object_type, query, correlation_id)


@router.post("/{object_type}", response_model=CreateOrUpdateDynamicObjectResponse)
@inject
async def create_dynamic_object(
    object_type: str,
    service: FromDishka[DynamicObjectServiceProtocol],
    connection: FromDishka[Connection],
    correlation_id: FromDishka[UUID],
    data: dict[str, Any] = Body(...),
) -> CreateOrUpdateDynamicObjectResponse:
    """Create a record from vendor-native fields."""
    return await service.create_object(connection, object_type, data, correlation_id)


@router.patch("/{object_type}/{object_id}", response_model=CreateOrUpdateDynamicObjectResponse)
@inject
async def update_dynamic_object(
    object_type: str,
    object_id: str,
    service: FromDishka[DynamicObjectServiceProtocol],
    connection: FromDishka[Connection],
    correlation_id: FromDishka[UUID],
    data: dict[str, Any] = Body(...),
) -> CreateOrUpdateDynamicObjectResponse:
    """Partially update a record with vendor-native fields."""
    return await service.update_object(connection, object_type, object_id, data, correlation_id)
