"""Pytest configuration and shared fixtures.

This module provides:
- Test database setup with real PostgreSQL (via Docker)
- Async session fixtures for repository tests
- FastAPI test clients: one wired to the test database, one wired to
  in-memory fakes for route unit tests
- A verified fake for the participant store
"""

# Set environment variables BEFORE any imports that trigger Settings validation
import os

os.environ.setdefault("PLANNER_DATABASE_USER", "postgres")
os.environ.setdefault("PLANNER_DATABASE_PASSWORD", "postgres")
os.environ.setdefault("PLANNER_DATABASE_HOST", "localhost")
os.environ.setdefault("PLANNER_DATABASE_PORT", "5432")
os.environ.setdefault("PLANNER_DATABASE_NAME", "test_planner")

from collections.abc import AsyncGenerator, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from core.config import Settings, clear_settings_cache
from core.database import Base
from tests.fakes import FakeParticipantStore

# =============================================================================
# Test Settings
# =============================================================================

TEST_DATABASE_NAME = "test_planner"


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing to the test database.

    Uses the same PostgreSQL instance from docker-compose but a separate database.
    """
    return Settings(
        database_user="postgres",
        database_password="postgres",
        database_host="localhost",
        database_port=5432,
        database_name=TEST_DATABASE_NAME,
    )


# =============================================================================
# Database Fixtures
# =============================================================================

# Check if database is available (skip DB tests in CI without database)
_DB_AVAILABLE = None
_SCHEMA_READY = False


def _check_db_available() -> bool:
    """Check if PostgreSQL is available. Cached after first check."""
    global _DB_AVAILABLE
    if _DB_AVAILABLE is not None:
        return _DB_AVAILABLE

    import socket

    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout(1)
        result = sock.connect_ex(("localhost", 5432))
        sock.close()
        _DB_AVAILABLE = result == 0
    except OSError:
        _DB_AVAILABLE = False

    return _DB_AVAILABLE


async def _ensure_schema(test_settings: Settings) -> None:
    """Create the test database and tables once per test session."""
    global _SCHEMA_READY
    if _SCHEMA_READY:
        return

    admin_url = test_settings.database_url.set(database="postgres")
    admin_engine = create_async_engine(
        admin_url, poolclass=NullPool, isolation_level="AUTOCOMMIT"
    )
    async with admin_engine.connect() as conn:
        result = await conn.execute(
            text("SELECT 1 FROM pg_database WHERE datname = :name"),
            {"name": TEST_DATABASE_NAME},
        )
        if not result.scalar():
            await conn.execute(text(f'CREATE DATABASE "{TEST_DATABASE_NAME}"'))
    await admin_engine.dispose()

    engine = create_async_engine(test_settings.database_url, poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS pgcrypto"))
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()

    _SCHEMA_READY = True


@pytest_asyncio.fixture
async def test_engine(test_settings: Settings) -> AsyncGenerator[AsyncEngine]:
    """Engine for the test database.

    Function-scoped with NullPool so no connection outlives the event loop
    of the test that opened it. Tables are recreated once per session.
    """
    if not _check_db_available():
        pytest.skip("PostgreSQL not available - skipping database test")

    await _ensure_schema(test_settings)

    engine = create_async_engine(
        test_settings.database_url,
        poolclass=NullPool,
        echo=False,
    )

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(
    test_engine: AsyncEngine,
) -> AsyncGenerator[AsyncSession]:
    """Create a test database session with transaction rollback.

    Each test runs in a transaction that's rolled back at the end,
    ensuring test isolation without the overhead of recreating tables.
    """
    connection = await test_engine.connect()
    transaction = await connection.begin()

    async_session_factory = async_sessionmaker(
        bind=connection,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    session = async_session_factory()

    try:
        yield session
    finally:
        await session.close()
        await transaction.rollback()
        await connection.close()


def _quote_table_name(name: str) -> str:
    return ".".join(f'"{part}"' for part in name.split("."))


@pytest_asyncio.fixture(autouse=True)
async def cleanup_database(
    request: pytest.FixtureRequest,
):
    """Truncate tables after integration tests to keep data isolated.

    Only requests `test_engine` when an integration marker is present,
    so pure unit tests never trigger the database fixtures.
    """
    yield

    if request.node.get_closest_marker("integration") is None:
        return

    if not _check_db_available():
        return

    engine: AsyncEngine = request.getfixturevalue("test_engine")

    table_names = [table.fullname for table in Base.metadata.sorted_tables]
    quoted_tables = ", ".join(_quote_table_name(name) for name in table_names)
    async with engine.begin() as conn:
        await conn.execute(text(f"TRUNCATE {quoted_tables} CASCADE"))


# =============================================================================
# Fakes
# =============================================================================


@pytest.fixture
def fake_store() -> FakeParticipantStore:
    return FakeParticipantStore()


@pytest.fixture
def mock_db() -> MagicMock:
    """Stand-in session for routes whose services are patched out."""
    session = MagicMock(spec=AsyncSession)
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def app(
    mock_db: MagicMock,
    fake_store: FakeParticipantStore,
) -> AsyncGenerator[FastAPI]:
    """FastAPI app with the database swapped for in-memory fakes.

    Route unit tests patch the service functions they exercise; the
    participant confirmation route runs against ``fake_store``.
    """
    from core.database import get_db
    from main import app as fastapi_app
    from routes.participants_routes import get_participant_store

    async def _get_mock_db() -> AsyncGenerator[AsyncSession]:
        yield mock_db

    fastapi_app.dependency_overrides[get_db] = _get_mock_db
    fastapi_app.dependency_overrides[get_participant_store] = lambda: fake_store

    yield fastapi_app

    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for route unit tests."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def db_app(test_engine: AsyncEngine) -> AsyncGenerator[FastAPI]:
    """FastAPI app backed by the test database, as the lifespan would set it up."""
    from main import app as fastapi_app

    fastapi_app.state.engine = test_engine
    fastapi_app.state.session_maker = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    fastapi_app.state.init_done = True

    yield fastapi_app

    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def db_client(db_app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client hitting routes that talk to the test database."""
    async with AsyncClient(
        transport=ASGITransport(app=db_app),
        base_url="http://test",
    ) as ac:
        yield ac


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio backend for anyio (required by httpx)."""
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None]:
    """Reset settings cache before each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
