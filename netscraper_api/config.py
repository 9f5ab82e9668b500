"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Read once per process: get_settings() is cached (lru_cache)
    - Storage backend choice (use_in_memory) is never changed at runtime
    - database_url is normalized to an async driver URL

Design Decisions:
    - DATABASE_URL and SQL_CONN_STR both accepted for the connection string
    - database_url has no default: the durable backend must be pointed somewhere
      explicitly (checked in infrastructure/storage.init_storage)
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ASYNC_DRIVERS = {
    "postgresql://": "postgresql+asyncpg://",
    "postgres://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Storage
    use_in_memory: bool = False
    database_url: str | None = Field(
        None, validation_alias=AliasChoices("database_url", "sql_conn_str"),
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_to_async_driver(cls, v: str | None) -> str | None:
        """Hosting platforms hand out sync URLs; SQLAlchemy async needs the driver."""
        if not isinstance(v, str):
            return v
        v = v.strip()
        if not v:
            return None
        for prefix, replacement in _ASYNC_DRIVERS.items():
            if v.startswith(prefix):
                return v.replace(prefix, replacement, 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_max_retries: int = 5
    database_retry_base_delay_ms: int = 500
    database_retry_max_delay_ms: int = 5_000

    # API
    frontend_origin: str = "http://localhost:5173"
    host: str = "0.0.0.0"
    port: int = 8000

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
