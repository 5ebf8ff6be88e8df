"""Shared fixtures for Dynamic Object Service tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from uuid import UUID, uuid4

import httpx
import pytest

from services.dynamic_object_service.config import Settings


@pytest.fixture
def test_settings() -> Settings:
    return Settings(SERVICE_NAME="dynamic_object_service_test")


@pytest.fixture
def correlation_id() -> UUID:
    return uuid4()


@pytest.fixture
async def http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Real httpx client for respx mocking."""
    async with httpx.AsyncClient() as client:
        yield client
