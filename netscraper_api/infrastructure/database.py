"""Database Session Manager — async connection pool with rollback, retry, and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)
    - run() retries transient faults at most max_retries times, then raises
    - SQLite connections enforce foreign keys (cascade delete relies on it)

Design Decisions:
    - expire_on_commit=False: rows stay readable after commit in async context
    - Exponential backoff with ±25% jitter, capped at max_delay_ms
    - SQLite in-memory URLs share one connection (StaticPool) so every session
      sees the same database
"""

import asyncio
import logging
import random
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable, TypeVar

from alembic import command
from alembic.config import Config
from sqlalchemy import event, text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

from netscraper_api.core.errors import DatabaseError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MIGRATIONS_LOCATION = "netscraper_api:migrations"


def _is_sqlite(database_url: str) -> bool:
    return database_url.startswith("sqlite")


def enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, retry, and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        max_retries: int = 5,
        base_delay_ms: int = 500,
        max_delay_ms: int = 5_000,
    ):
        if _is_sqlite(database_url):
            engine_kwargs: dict = {}
            if ":memory:" in database_url:
                engine_kwargs["poolclass"] = StaticPool
                engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_pre_ping": True,
                "pool_recycle": 3600,
            }
        self.engine = create_async_engine(database_url, **engine_kwargs)
        if _is_sqlite(database_url):
            event.listen(self.engine.sync_engine, "connect", enable_sqlite_foreign_keys)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise DatabaseError("Integrity constraint violated", "commit")
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DatabaseError(
                "Connection or operational error", "execute", transient=True,
            )
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DatabaseError(
                "Database driver error", "query",
                transient=e.connection_invalidated,
            )
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown")
        finally:
            await session.close()

    async def run(self, operation: Callable[[AsyncSession], Awaitable[T]]) -> T:
        """Run operation in a fresh session, retrying transient failures."""
        for attempt in range(self.max_retries + 1):
            try:
                async with self.session() as db:
                    return await operation(db)
            except DatabaseError as e:
                if not e.transient or attempt >= self.max_retries:
                    raise
                delay = self._backoff(attempt)
                logger.warning(
                    f"Transient DB error, retry after {delay}ms: {e.message}",
                    extra={"attempt": attempt + 1},
                )
                await asyncio.sleep(delay / 1000)
        raise AssertionError("unreachable")

    async def health_check(self) -> bool:
        """Check database connectivity. False means the connection failed."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (DBAPIError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311


def upgrade_schema(database_url: str, revision: str = "head") -> None:
    """Apply Alembic migrations up to revision. Blocking; call via asyncio.to_thread."""
    config = Config()
    config.set_main_option("script_location", MIGRATIONS_LOCATION)
    # ConfigParser interpolation: escape percent-encoded credentials
    config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    command.upgrade(config, revision)
    logger.info(f"Database schema upgraded to {revision}")
