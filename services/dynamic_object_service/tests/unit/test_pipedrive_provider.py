"""Unit tests for the Pipedrive request builder."""

from __future__ import annotations

import json
from uuid import UUID

import httpx
import pytest
from crm_common_core.config_enums import CRMProviderType
from respx import MockRouter

from services.dynamic_object_service.api_models import ListQuery
from services.dynamic_object_service.config import Settings
from services.dynamic_object_service.implementations.providers import PipedriveProviderImpl
from services.dynamic_object_service.tests.test_provider import make_connection

COMPANY_URL = "https://acme.pipedrive.com/api"
CONNECTION = make_connection(CRMProviderType.PIPEDRIVE, tp_account_url=COMPANY_URL)


@pytest.fixture
def pipedrive(http_client: httpx.AsyncClient, test_settings: Settings) -> PipedriveProviderImpl:
    return PipedriveProviderImpl(http_client, test_settings)


async def test_get_object_pluralizes_and_unwraps_data(
    pipedrive: PipedriveProviderImpl, correlation_id: UUID, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{COMPANY_URL}/v1/deals/12").mock(
        return_value=httpx.Response(200, json={"success": True, "data": {"id": 12, "title": "Deal"}})
    )

    record = await pipedrive.get_object(CONNECTION, "deal", "12", correlation_id)

    assert record == {"id": 12, "title": "Deal"}


async def test_list_objects_uses_next_start(
    pipedrive: PipedriveProviderImpl, correlation_id: UUID, respx_mock: MockRouter
) -> None:
    route = respx_mock.get(f"{COMPANY_URL}/v1/persons").mock(
        return_value=httpx.Response(
            200,
            json={
                "success": True,
                "data": [{"id": 1}, {"id": 2}],
                "additional_data": {
                    "pagination": {"start": 10, "limit": 2, "more_items_in_collection": True, "next_start": 12}
                },
            },
        )
    )

    page = await pipedrive.list_objects(
        CONNECTION, "person", ListQuery(page_size=2, cursor="10"), correlation_id
    )

    params = route.calls.last.request.url.params
    assert params["limit"] == "2"
    assert params["start"] == "10"
    assert page.next == "12"
    assert page.previous is None


async def test_list_objects_last_page_has_no_next(
    pipedrive: PipedriveProviderImpl, correlation_id: UUID, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{COMPANY_URL}/v1/persons").mock(
        return_value=httpx.Response(
            200,
            json={
                "success": True,
                "data": None,
                "additional_data": {"pagination": {"more_items_in_collection": False}},
            },
        )
    )

    page = await pipedrive.list_objects(CONNECTION, "person", ListQuery(), correlation_id)

    assert page.results == []
    assert page.next is None


async def test_create_posts_and_update_puts(
    pipedrive: PipedriveProviderImpl, correlation_id: UUID, respx_mock: MockRouter
) -> None:
    create_route = respx_mock.post(f"{COMPANY_URL}/v1/organizations").mock(
        return_value=httpx.Response(201, json={"success": True, "data": {"id": 3, "name": "Acme"}})
    )
    update_route = respx_mock.put(f"{COMPANY_URL}/v1/organizations/3").mock(
        return_value=httpx.Response(200, json={"success": True, "data": {"id": 3, "name": "Acme AB"}})
    )

    created = await pipedrive.create_object(CONNECTION, "organization", {"name": "Acme"}, correlation_id)
    updated = await pipedrive.update_object(
        CONNECTION, "organization", "3", {"name": "Acme AB"}, correlation_id
    )

    assert json.loads(create_route.calls.last.request.content) == {"name": "Acme"}
    assert json.loads(update_route.calls.last.request.content) == {"name": "Acme AB"}
    assert created["id"] == 3
    assert updated["name"] == "Acme AB"
