"""Root conftest — shared test configuration and repository fixtures."""

import os

# Ensure tests never reach a real database or read a developer .env
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("USE_IN_MEMORY", "false")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402

from netscraper_api.db.base import Base  # noqa: E402
import netscraper_api.models  # noqa: E402,F401
from netscraper_api.infrastructure.database import DatabaseSessionManager  # noqa: E402
from netscraper_api.infrastructure.memory_repository import InMemorySearchRepository  # noqa: E402
from netscraper_api.infrastructure.sql_repository import SqlSearchRepository  # noqa: E402


async def create_schema(manager: DatabaseSessionManager) -> None:
    """Create tables straight from ORM metadata, skipping Alembic."""
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
async def db_manager():
    """Fresh in-memory SQLite database with the ORM schema."""
    manager = DatabaseSessionManager(
        "sqlite+aiosqlite:///:memory:", max_retries=2, base_delay_ms=0,
    )
    await create_schema(manager)
    yield manager
    await manager.dispose()


@pytest.fixture
async def sql_repo(db_manager):
    return SqlSearchRepository(db_manager)


@pytest.fixture
def memory_repo():
    return InMemorySearchRepository(seed=False)


@pytest.fixture(params=["sql", "memory"])
async def repo(request, db_manager):
    """Each backend must satisfy the same contract."""
    if request.param == "sql":
        return SqlSearchRepository(db_manager)
    return InMemorySearchRepository(seed=False)
