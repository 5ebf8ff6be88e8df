"""Unit tests for the Zoho request builder."""

from __future__ import annotations

import json
from uuid import UUID

import httpx
import pytest
from crm_common_core.config_enums import CRMProviderType
from respx import MockRouter

from services.dynamic_object_service.api_models import ListQuery
from services.dynamic_object_service.config import Settings
from services.dynamic_object_service.implementations.providers import ZohoProviderImpl
from services.dynamic_object_service.tests.test_provider import (
    TEST_ACCESS_TOKEN,
    make_connection,
)

CONNECTION = make_connection(CRMProviderType.ZOHO)


@pytest.fixture
def zoho(http_client: httpx.AsyncClient, test_settings: Settings) -> ZohoProviderImpl:
    return ZohoProviderImpl(http_client, test_settings)


@pytest.fixture
def leads_url(test_settings: Settings) -> str:
    return f"{test_settings.ZOHO_API_BASE_URL}/crm/v3/Leads"


async def test_get_object_uses_zoho_auth_scheme(
    zoho: ZohoProviderImpl, leads_url: str, correlation_id: UUID, respx_mock: MockRouter
) -> None:
    route = respx_mock.get(f"{leads_url}/4150868000000225013").mock(
        return_value=httpx.Response(
            200, json={"data": [{"id": "4150868000000225013", "Last_Name": "Lovelace"}]}
        )
    )

    record = await zoho.get_object(
        CONNECTION, "Leads", "4150868000000225013", correlation_id, fields="Last_Name"
    )

    request = route.calls.last.request
    assert request.headers["Authorization"] == f"Zoho-oauthtoken {TEST_ACCESS_TOKEN}"
    assert request.url.params["fields"] == "Last_Name"
    assert record == {"id": "4150868000000225013", "Last_Name": "Lovelace"}


async def test_list_objects_maps_page_token(
    zoho: ZohoProviderImpl, leads_url: str, correlation_id: UUID, respx_mock: MockRouter
) -> None:
    route = respx_mock.get(leads_url).mock(
        return_value=httpx.Response(
            200,
            json={
                "data": [{"id": "1"}, {"id": "2"}],
                "info": {"next_page_token": "tok-2", "previous_page_token": "tok-0"},
            },
        )
    )

    page = await zoho.list_objects(
        CONNECTION,
        "Leads",
        ListQuery(fields="Last_Name,Email", page_size=2, cursor="tok-1"),
        correlation_id,
    )

    params = route.calls.last.request.url.params
    assert params["fields"] == "Last_Name,Email"
    assert params["per_page"] == "2"
    assert params["page_token"] == "tok-1"
    assert [r["id"] for r in page.results] == ["1", "2"]
    assert (page.next, page.previous) == ("tok-2", "tok-0")


async def test_list_objects_empty_module(
    zoho: ZohoProviderImpl, leads_url: str, correlation_id: UUID, respx_mock: MockRouter
) -> None:
    respx_mock.get(leads_url).mock(return_value=httpx.Response(204))

    page = await zoho.list_objects(CONNECTION, "Leads", ListQuery(), correlation_id)

    assert page.results == []
    assert page.next is None


async def test_create_and_update_wrap_data(
    zoho: ZohoProviderImpl, leads_url: str, correlation_id: UUID, respx_mock: MockRouter
) -> None:
    create_route = respx_mock.post(leads_url).mock(
        return_value=httpx.Response(201, json={"data": [{"code": "SUCCESS", "details": {"id": "5"}}]})
    )
    update_route = respx_mock.put(f"{leads_url}/5").mock(
        return_value=httpx.Response(200, json={"data": [{"code": "SUCCESS", "details": {"id": "5"}}]})
    )

    created = await zoho.create_object(CONNECTION, "Leads", {"Last_Name": "L"}, correlation_id)
    updated = await zoho.update_object(CONNECTION, "Leads", "5", {"Email": "e@x.io"}, correlation_id)

    assert json.loads(create_route.calls.last.request.content) == {"data": [{"Last_Name": "L"}]}
    assert json.loads(update_route.calls.last.request.content) == {"data": [{"Email": "e@x.io"}]}
    assert created["details"] == {"id": "5"}
    assert updated["code"] == "SUCCESS"
