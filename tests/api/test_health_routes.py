"""Health routes — liveness and storage reachability."""

from netscraper_api.infrastructure.storage import get_repository
from netscraper_api.main import app


async def test_liveness(client):
    res = await client.get("/")
    assert res.status_code == 200
    assert res.text == "OK"


async def test_db_health_up(client):
    res = await client.get("/health/db")
    assert res.status_code == 200
    assert res.json() == {"db": "up"}


class _StubRepository:
    def __init__(self, result):
        self._result = result

    async def ping(self):
        if isinstance(self._result, Exception):
            raise self._result
        return self._result


async def test_db_health_down(client):
    app.dependency_overrides[get_repository] = lambda: _StubRepository(False)

    res = await client.get("/health/db")

    assert res.status_code == 200
    assert res.json() == {"db": "down"}


async def test_db_health_check_fault_is_reported(client):
    app.dependency_overrides[get_repository] = lambda: _StubRepository(
        RuntimeError("login failed for user 'sa'"),
    )

    res = await client.get("/health/db")

    assert res.status_code == 503
    assert res.json()["error"]["code"] == "HEALTH_CHECK_FAILED"
    assert "login failed" in res.json()["error"]["message"]
