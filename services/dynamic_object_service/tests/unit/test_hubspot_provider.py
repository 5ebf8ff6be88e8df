"""Unit tests for the HubSpot request builder and association resolution."""

from __future__ import annotations

import json
from uuid import UUID

import httpx
import pytest
from crm_common_core.config_enums import CRMProviderType
from respx import MockRouter

from services.dynamic_object_service.api_models import ListQuery
from services.dynamic_object_service.config import Settings
from services.dynamic_object_service.implementations.file_field_mapping_store_impl import (
    FileFieldMappingStore,
)
from services.dynamic_object_service.implementations.providers.hubspot_associations import (
    HubSpotAssociationResolver,
    filter_valid_associations,
    is_valid_association_type,
)
from services.dynamic_object_service.implementations.providers import HubSpotProviderImpl
from services.dynamic_object_service.implementations.unifier_impl import FieldMappingUnifier
from services.dynamic_object_service.tests.test_provider import (
    TEST_ACCESS_TOKEN,
    make_connection,
)

CONNECTION = make_connection(CRMProviderType.HUBSPOT)


@pytest.fixture
def hubspot(http_client: httpx.AsyncClient, test_settings: Settings) -> HubSpotProviderImpl:
    unifier = FieldMappingUnifier(FileFieldMappingStore({}))
    resolver = HubSpotAssociationResolver(http_client, test_settings, unifier)
    return HubSpotProviderImpl(http_client, test_settings, resolver)


def test_association_type_validation() -> None:
    assert is_valid_association_type("companies")
    assert not is_valid_association_type("p_custom_object")
    assert filter_valid_associations(["deals", "bogus", "contacts"]) == ["deals", "contacts"]


async def test_get_object_flattens_properties(
    hubspot: HubSpotProviderImpl,
    test_settings: Settings,
    correlation_id: UUID,
    respx_mock: MockRouter,
) -> None:
    route = respx_mock.get(f"{test_settings.HUBSPOT_API_BASE_URL}/crm/v3/objects/contacts/51").mock(
        return_value=httpx.Response(
            200,
            json={
                "id": "51",
                "properties": {"firstname": "Ada", "email": "ada@example.com"},
                "archived": False,
            },
        )
    )

    record = await hubspot.get_object(
        CONNECTION, "contacts", "51", correlation_id, fields="firstname, email"
    )

    request = route.calls.last.request
    assert request.headers["Authorization"] == f"Bearer {TEST_ACCESS_TOKEN}"
    assert request.url.params["properties"] == "firstname,email"
    assert "associations" not in request.url.params
    assert record["firstname"] == "Ada"
    assert record["email"] == "ada@example.com"
    assert record["associations"] == {}


async def test_get_object_resolves_requested_associations(
    hubspot: HubSpotProviderImpl,
    test_settings: Settings,
    correlation_id: UUID,
    respx_mock: MockRouter,
) -> None:
    base = f"{test_settings.HUBSPOT_API_BASE_URL}/crm/v3/objects"
    get_route = respx_mock.get(f"{base}/deals/7").mock(
        return_value=httpx.Response(
            200,
            json={
                "id": "7",
                "properties": {"dealname": "Big deal"},
                "associations": {
                    "companies": {
                        "results": [{"id": "9", "type": "deal_to_company"}, {"id": "9"}]
                    }
                },
            },
        )
    )
    batch_route = respx_mock.post(f"{base}/companies/batch/read").mock(
        return_value=httpx.Response(
            200,
            json={"results": [{"id": "9", "properties": {"name": "Acme"}}]},
        )
    )

    record = await hubspot.get_object(
        CONNECTION, "deals", "7", correlation_id, associations=["companies", "bogus"]
    )

    assert get_route.calls.last.request.url.params["associations"] == "companies"
    assert json.loads(batch_route.calls.last.request.content) == {"inputs": [{"id": "9"}]}
    assert record["associations"] == {
        "companies": [{"id": "9", "additional": {"name": "Acme"}}]
    }


async def test_list_objects_paginates_with_after(
    hubspot: HubSpotProviderImpl,
    test_settings: Settings,
    correlation_id: UUID,
    respx_mock: MockRouter,
) -> None:
    route = respx_mock.get(f"{test_settings.HUBSPOT_API_BASE_URL}/crm/v3/objects/companies").mock(
        return_value=httpx.Response(
            200,
            json={
                "results": [
                    {"id": "1", "properties": {"name": "A"}},
                    {"id": "2", "properties": {"name": "B"}},
                ],
                "paging": {"next": {"after": "3"}},
            },
        )
    )

    page = await hubspot.list_objects(
        CONNECTION, "companies", ListQuery(page_size=2, cursor="1"), correlation_id
    )

    params = route.calls.last.request.url.params
    assert params["limit"] == "2"
    assert params["after"] == "1"
    assert [r["name"] for r in page.results] == ["A", "B"]
    assert page.next == "3"
    assert page.previous is None


async def test_create_object_wraps_properties(
    hubspot: HubSpotProviderImpl,
    test_settings: Settings,
    correlation_id: UUID,
    respx_mock: MockRouter,
) -> None:
    route = respx_mock.post(f"{test_settings.HUBSPOT_API_BASE_URL}/crm/v3/objects/contacts").mock(
        return_value=httpx.Response(201, json={"id": "99", "properties": {"firstname": "Ada"}})
    )

    record = await hubspot.create_object(CONNECTION, "contacts", {"firstname": "Ada"}, correlation_id)

    assert json.loads(route.calls.last.request.content) == {"properties": {"firstname": "Ada"}}
    assert record["id"] == "99"
    assert record["firstname"] == "Ada"


async def test_update_object_patches(
    hubspot: HubSpotProviderImpl,
    test_settings: Settings,
    correlation_id: UUID,
    respx_mock: MockRouter,
) -> None:
    route = respx_mock.patch(
        f"{test_settings.HUBSPOT_API_BASE_URL}/crm/v3/objects/contacts/99"
    ).mock(return_value=httpx.Response(200, json={"id": "99", "properties": {"lastname": "L"}}))

    record = await hubspot.update_object(
        CONNECTION, "contacts", "99", {"lastname": "L"}, correlation_id
    )

    assert json.loads(route.calls.last.request.content) == {"properties": {"lastname": "L"}}
    assert record["lastname"] == "L"


async def test_vendor_error_raises_http_status_error(
    hubspot: HubSpotProviderImpl,
    test_settings: Settings,
    correlation_id: UUID,
    respx_mock: MockRouter,
) -> None:
    respx_mock.get(f"{test_settings.HUBSPOT_API_BASE_URL}/crm/v3/objects/contacts/404").mock(
        return_value=httpx.Response(404, json={"message": "not found"})
    )

    with pytest.raises(httpx.HTTPStatusError):
        await hubspot.get_object(CONNECTION, "contacts", "404", correlation_id)
