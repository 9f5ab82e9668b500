"""Alembic environment — async migration runner for NetScraper.

Imports all models so Base.metadata is populated before autogenerate.

Design Decisions:
    - URL precedence: sqlalchemy.url set by the caller (startup upgrade_schema or
      alembic.ini), then DATABASE_URL / SQL_CONN_STR via Settings
    - fileConfig only when run from the CLI with an ini file; the app owns
      logging when migrations run at startup
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import event, pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from netscraper_api.config import Settings
from netscraper_api.db.base import Base
from netscraper_api.infrastructure.database import enable_sqlite_foreign_keys
# Import all models so Base.metadata has them
from netscraper_api.models.search_group import SearchGroup  # noqa: F401
from netscraper_api.models.search_term import SearchTerm  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def _get_database_url() -> str:
    """Get DB URL from the Alembic config, else from application settings."""
    url = config.get_main_option("sqlalchemy.url")
    if url:
        return url
    settings_url = Settings().database_url
    if not settings_url:
        raise RuntimeError("No database URL: set sqlalchemy.url or DATABASE_URL")
    return settings_url


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=_get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=connection.dialect.name == "sqlite",
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run migrations in 'online' mode with async engine."""
    configuration = config.get_section(config.config_ini_section, {})
    configuration["sqlalchemy.url"] = _get_database_url()
    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    if connectable.dialect.name == "sqlite":
        event.listen(connectable.sync_engine, "connect", enable_sqlite_foreign_keys)
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
