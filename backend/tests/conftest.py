"""
Snipnet Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── memory_store: Fresh InMemorySnippetStore
    ├── controller: SnippetController over memory_store
    ├── session_u1 / session_u2: Sessions of two different users
    ├── auth_headers: Builds Authorization headers with real signed tokens
    ├── sql_engine: Engine on a throwaway in-memory SQLite database
    │   └── sql_session: AsyncSession on sql_engine
    ├── test_client: HTTPX AsyncClient with the store swapped for memory_store
    └── sql_client: HTTPX AsyncClient on the real SQL wiring over sql_engine
"""

import os

# Override settings for testing BEFORE any snipnet imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SNIPPET_STORE"] = "sql"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from snipnet.auth import Session, create_access_token
from snipnet.database import Base
from snipnet.models import snippet as snippet_model  # noqa: F401
from snipnet.services.memory_snippet_store import InMemorySnippetStore
from snipnet.services.snippet_controller import SnippetController


@pytest.fixture
def memory_store():
    return InMemorySnippetStore()


@pytest.fixture
def controller(memory_store):
    return SnippetController(memory_store)


@pytest.fixture
def session_u1():
    return Session(user_id="u1")


@pytest.fixture
def session_u2():
    return Session(user_id="u2")


@pytest.fixture
def snippet_body():
    """A valid create / replace body."""
    return {"title": "t", "description": "d", "code": "c"}


@pytest.fixture
def auth_headers():
    """
    Returns a function building Authorization headers for a user id.

    Usage:
        response = await test_client.post(url, json=body, headers=auth_headers("u1"))
    """
    def _build(user_id: str) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}
    return _build


@pytest_asyncio.fixture
async def sql_engine():
    """
    Provides an engine on a private in-memory SQLite database with the schema.

    StaticPool keeps the single connection (and so the database) alive for
    the whole test.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def sql_session(sql_engine):
    """Provides an AsyncSession on sql_engine."""
    factory = async_sessionmaker(sql_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(memory_store):
    """
    Provides an async HTTP test client for endpoint testing.

    The app's store dependency is overridden with memory_store, so tests can
    seed and inspect state directly through the fixture.
    """
    from snipnet.dependencies import get_snippet_store
    from snipnet.main import app

    async def _memory_store_override():
        return memory_store

    app.dependency_overrides[get_snippet_store] = _memory_store_override
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def sql_client(sql_engine, monkeypatch):
    """
    Provides an async HTTP test client wired exactly as in production.

    No dependency overrides: get_snippet_store builds a SqlSnippetStore on the
    session from database.get_db_session, which commits or rolls back per
    request. Only the session factory is pointed at sql_engine.
    """
    from snipnet import database
    from snipnet.config import settings
    from snipnet.main import app

    monkeypatch.setattr(settings, "snippet_store", "sql")
    monkeypatch.setattr(
        database,
        "async_session_factory",
        async_sessionmaker(sql_engine, class_=AsyncSession, expire_on_commit=False),
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
