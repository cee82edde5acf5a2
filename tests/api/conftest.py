"""Fixtures for API tests."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from solarbooks.api.main import app


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """ASGI client; dependency overrides set by a test are cleared afterwards."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
