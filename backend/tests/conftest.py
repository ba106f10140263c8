"""
NotesApp Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment variables are set before any notesapp import so Settings
       and the module-level engine pick up test values.

Fixture Hierarchy:
    Function-scoped:
    ├── mock_db_session:  AsyncMock standing in for an AsyncSession
    ├── session_factory:  in-memory SQLite (aiosqlite) with the full schema
    └── client_factory:   builds httpx AsyncClients bound to the app, with
                          get_db_session pointed at session_factory
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SESSION_SECRET"] = "test-session-secret-that-is-long-enough-0123456789"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone
from typing import AsyncGenerator, Callable, List
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from notesapp.database import Base, get_db_session
import notesapp.models  # noqa: F401


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession for handler tests.

    Repositories are patched in those tests, so the session is only passed
    through; rollback is awaited by the identity collaborator on conflicts.
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def owner_id() -> str:
    return str(uuid4())


@pytest.fixture
def other_user_id() -> str:
    return str(uuid4())


@pytest.fixture
def now() -> datetime:
    return datetime.now(timezone.utc)


# ══════════════════════════════════════════════════════════════════════════
# API fixtures (real app, in-memory database)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """
    Fresh in-memory database per test.

    StaticPool keeps a single connection so every session sees the same
    :memory: database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def client_factory(session_factory) -> AsyncGenerator[Callable[[], AsyncClient], None]:
    """
    Returns a callable producing independent clients (one per simulated user,
    each with its own cookie jar).

    The https:// base URL lets Secure session cookies round-trip.
    """
    from notesapp.main import app

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    clients: List[AsyncClient] = []

    def make_client() -> AsyncClient:
        client = AsyncClient(transport=ASGITransport(app=app), base_url="https://test")
        clients.append(client)
        return client

    yield make_client

    for client in clients:
        await client.aclose()
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(client_factory) -> AsyncClient:
    return client_factory()
