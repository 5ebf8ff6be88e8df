"""Tests for the FastAPI CRMServiceError handlers."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any
from uuid import UUID, uuid4

import pytest
from crm_common_core.error_enums import ErrorCode
from crm_service_libs.error_handling import (
    raise_authentication_error,
    raise_resource_not_found,
    raise_unknown_error,
    raise_validation_error,
)
from crm_service_libs.error_handling.fastapi import register_error_handlers
from fastapi import Body, FastAPI
from httpx import ASGITransport, AsyncClient

CORRELATION_ID = uuid4()


def _create_app() -> FastAPI:
    app = FastAPI(title="svc")
    register_error_handlers(app)

    @app.get("/validation")
    async def validation() -> None:
        raise_validation_error(
            service="svc",
            operation="validation",
            field="pageSize",
            message="pageSize must be a positive integer",
            correlation_id=CORRELATION_ID,
            value="0",
        )

    @app.get("/auth")
    async def auth() -> None:
        raise_authentication_error(
            service="svc", operation="auth", message="no tenant", correlation_id=CORRELATION_ID
        )

    @app.get("/missing")
    async def missing() -> None:
        raise_resource_not_found(
            service="svc",
            operation="missing",
            resource_type="Connection",
            resource_id="t",
            correlation_id=CORRELATION_ID,
        )

    @app.get("/unknown")
    async def unknown() -> None:
        raise_unknown_error(
            service="svc", operation="unknown", message="Internal server error", correlation_id=CORRELATION_ID
        )

    @app.post("/objects")
    async def create(data: dict[str, Any] = Body(...)) -> dict[str, Any]:
        return data

    @app.get("/crash")
    async def crash() -> None:
        raise RuntimeError("secret internals")

    return app


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=_create_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.mark.parametrize(
    "path, status_code, code",
    [
        ("/validation", 400, ErrorCode.VALIDATION_ERROR),
        ("/auth", 401, ErrorCode.AUTHENTICATION_ERROR),
        ("/missing", 404, ErrorCode.RESOURCE_NOT_FOUND),
        ("/unknown", 500, ErrorCode.UNKNOWN_ERROR),
    ],
)
async def test_application_errors_map_to_status(
    client: AsyncClient, path: str, status_code: int, code: ErrorCode
) -> None:
    response = await client.get(path)

    assert response.status_code == status_code
    error = response.json()["error"]
    assert error["code"] == code.value
    assert error["correlation_id"] == str(CORRELATION_ID)
    assert error["service"] == "svc"


async def test_validation_error_body(client: AsyncClient) -> None:
    response = await client.get("/validation")

    error = response.json()["error"]
    assert error["message"] == "pageSize must be a positive integer"
    assert error["details"] == {"field": "pageSize", "value": "0"}
    assert error["operation"] == "validation"
    assert "timestamp" in error


async def test_unexpected_exception_is_generic_500(client: AsyncClient) -> None:
    response = await client.get("/crash")

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == ErrorCode.UNKNOWN_ERROR.value
    assert error["message"] == "Internal server error"
    assert UUID(error["correlation_id"])
    assert "secret internals" not in response.text


async def test_request_validation_uses_error_body(client: AsyncClient) -> None:
    response = await client.post("/objects", json=[1, 2])

    assert response.status_code == 400
    body = response.json()
    assert "detail" not in body
    error = body["error"]
    assert error["code"] == ErrorCode.VALIDATION_ERROR.value
    assert error["message"] == "Request validation failed"
    assert error["service"] == "svc"
    assert error["details"]["field"] == "body"
    assert error["details"]["errors"][0]["type"] == "dict_type"
    assert UUID(error["correlation_id"])
