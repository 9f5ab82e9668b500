"""Storage Selection — picks the SearchRepository backend once per process.

Invariants:
    - init_storage runs once, from the FastAPI lifespan; the backend never switches
    - The durable backend requires a database_url and is migrated before use
    - get_repository is the only way routes reach storage (overridable in tests)
"""

import asyncio
import logging

from netscraper_api.config import Settings
from netscraper_api.core.repository_protocols import SearchRepository
from netscraper_api.infrastructure.database import DatabaseSessionManager, upgrade_schema
from netscraper_api.infrastructure.memory_repository import InMemorySearchRepository
from netscraper_api.infrastructure.sql_repository import SqlSearchRepository

logger = logging.getLogger(__name__)

# Singletons (initialized on startup)
repository: SearchRepository | None = None
db_manager: DatabaseSessionManager | None = None


async def init_storage(settings: Settings) -> SearchRepository:
    global repository, db_manager
    if settings.use_in_memory:
        repository = InMemorySearchRepository()
        logger.info("Storage backend: in-memory (state is lost on restart)")
        return repository

    if not settings.database_url:
        raise RuntimeError(
            "Missing connection string. Set DATABASE_URL or SQL_CONN_STR.",
        )
    await asyncio.to_thread(upgrade_schema, settings.database_url)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        max_retries=settings.database_max_retries,
        base_delay_ms=settings.database_retry_base_delay_ms,
        max_delay_ms=settings.database_retry_max_delay_ms,
    )
    repository = SqlSearchRepository(db_manager)
    logger.info("Storage backend: relational database")
    return repository


async def shutdown_storage() -> None:
    global repository, db_manager
    if db_manager is not None:
        await db_manager.dispose()
    repository = None
    db_manager = None


def get_repository() -> SearchRepository:
    """FastAPI dependency for the configured repository."""
    if repository is None:
        raise RuntimeError("Storage not initialized")
    return repository
