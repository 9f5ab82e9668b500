"""API test fixtures — FastAPI test client over a fresh SQLite database.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_repository dependency overridden; the lifespan never runs under ASGITransport
"""

import pytest
from httpx import ASGITransport, AsyncClient

from netscraper_api.infrastructure.storage import get_repository
from netscraper_api.main import app


@pytest.fixture
async def client(sql_repo):
    """FastAPI test client with the repository dependency overridden."""
    app.dependency_overrides[get_repository] = lambda: sql_repo

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def sports(client):
    """A group named Sports, created through the API."""
    res = await client.post("/api/groups", json={"name": "Sports"})
    assert res.status_code == 201
    return res.json()
