"""Application configuration using pydantic-settings."""

from functools import cached_property, lru_cache
from typing import Self

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import URL

# HTTP server constants. Not configurable on purpose: the deployment
# expects the API on this port with these timeouts.
SERVER_HOST = "0.0.0.0"
SERVER_PORT = 8080
SERVER_IDLE_TIMEOUT_SECONDS = 60
SERVER_READ_TIMEOUT_SECONDS = 5
SERVER_WRITE_TIMEOUT_SECONDS = 5
SERVER_SHUTDOWN_GRACE_SECONDS = 30


class Settings(BaseSettings):
    """Application settings loaded from PLANNER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # PostgreSQL connection
    database_user: str = ""
    database_password: str = ""
    database_host: str = "localhost"
    database_port: int = 5432
    database_name: str = ""

    # Database pool settings
    # Total connections per worker = pool_size + max_overflow
    db_pool_size: int = 5
    db_pool_max_overflow: int = 5
    db_pool_timeout: int = 30
    db_pool_recycle: int = 300
    db_statement_timeout_ms: int = 10000
    db_echo: bool = False  # Set True to log all SQL queries (very verbose)

    # Enables /docs and relaxes validation for local development
    debug: bool = False

    @model_validator(mode="after")
    def validate_config(self) -> Self:
        if not self.database_name:
            raise ValueError(
                "Database configuration required. Set PLANNER_DATABASE_NAME."
            )
        if not self.debug and not self.database_user:
            raise ValueError(
                "PLANNER_DATABASE_USER must be set. "
                "Set PLANNER_DEBUG=true to skip this check in development."
            )
        return self

    def _url(self, drivername: str) -> URL:
        return URL.create(
            drivername=drivername,
            username=self.database_user or None,
            password=self.database_password or None,
            host=self.database_host,
            port=self.database_port,
            database=self.database_name,
        )

    @cached_property
    def database_url(self) -> URL:
        """Async URL used by the application engine."""
        return self._url("postgresql+asyncpg")

    @cached_property
    def sync_database_url(self) -> URL:
        """Synchronous URL used by Alembic migrations."""
        return self._url("postgresql+psycopg2")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this in tests to reset settings between test cases.
    After clearing, the next get_settings() call will create
    a fresh Settings instance with current environment variables.
    """
    get_settings.cache_clear()
