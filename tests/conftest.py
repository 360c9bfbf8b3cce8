"""
Notekeeper Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets a fresh in-memory SQLite database (aiosqlite) with the
       schema created from Base.metadata; stores and services are built on
       a session from that database, and the HTTP client routes the app's
       `get_db_session` dependency to it.

Fixture Hierarchy (all function-scoped):
    engine → session_factory → db_session → user_store / note_store
                                          → authenticator / note_service
    session_factory → test_client (httpx AsyncClient over ASGITransport)
    mock_db_session: AsyncMock session for failure-path tests
"""

import os

# Settings are read at import time; configure before importing the app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret-0123456789abcdefghijklmnopqrstuvwxyz"
os.environ["JWT_EXPIRE_MINUTES"] = "60"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import notekeeper.models  # noqa: F401
from notekeeper.database import Base, get_db_session
from notekeeper.services.auth_service import Authenticator
from notekeeper.services.note_service import NoteService
from notekeeper.stores.notes import NoteStore
from notekeeper.stores.users import UserStore

TEST_SECRET = os.environ["JWT_SECRET"]


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine():
    """
    In-memory SQLite engine with the full schema.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
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


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
        await NoteStore(mock_db_session).find(owner_id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Store & Service Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def user_store(db_session):
    return UserStore(db_session)


@pytest.fixture
def note_store(db_session):
    return NoteStore(db_session)


@pytest.fixture
def authenticator(user_store):
    return Authenticator(
        users=user_store,
        secret=TEST_SECRET,
        expire_minutes=60,
        hash_rounds=4,
    )


@pytest.fixture
def note_service(note_store):
    return NoteService(notes=note_store)


@pytest_asyncio.fixture
async def alice(authenticator):
    """A registered user and their token: (User, token)."""
    return await authenticator.register("alice@example.com", "alice-secret")


@pytest_asyncio.fixture
async def bob(authenticator):
    return await authenticator.register("bob@example.com", "bob-secret")


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    The app's session dependency is overridden to use the per-test database,
    with the same commit/rollback behaviour as production.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from notekeeper.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
