"""
Daybook Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── db_engine:       In-memory aiosqlite engine with all tables created
    ├── db_session:      Real AsyncSession on that engine
    ├── test_app:        Fresh app whose get_db_session uses db_engine
    ├── test_client:     HTTPX AsyncClient talking to test_app
    ├── make_token:      Mints bearer tokens signed with the test secret
    └── auth_headers / other_auth_headers: two distinct users
"""

import os

# Must be set before anything imports app.config
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret-not-real-0123456789abcdef"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timedelta, timezone  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import jwt  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.config import settings  # noqa: E402
from app.database import Base, create_session_factory, get_db_session  # noqa: E402
from app.models.event import Event  # noqa: E402,F401
from app.models.note import Note  # noqa: E402,F401
from app.models.task import Task  # noqa: E402,F401

USER_ID = "user-alice"
OTHER_USER_ID = "user-bob"


@pytest.fixture
def mock_db_session():
    """
    A mock async database session (no real DB needed).

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite shared by every session of one test.

    StaticPool keeps the single connection alive; without it each checkout
    would get a new, empty in-memory database.
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
async def db_session(db_engine):
    session_factory = create_session_factory(db_engine)
    async with session_factory() as session:
        yield session


@pytest.fixture
def test_app(db_engine):
    """A fresh app whose request sessions come from the test engine."""
    from app.main import create_app

    app = create_app()
    session_factory = create_session_factory(db_engine)

    async def _get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _get_db_session
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed straight to the app through ASGITransport.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_token():
    """Factory for signed bearer tokens; extra keyword args become claims."""

    def _make(sub=USER_ID, secret=None, expires_in=timedelta(hours=1), **claims):
        payload = dict(claims)
        if sub is not None:
            payload["sub"] = sub
        payload["exp"] = datetime.now(timezone.utc) + expires_in
        return jwt.encode(payload, secret or settings.jwt_secret, algorithm="HS256")

    return _make


@pytest.fixture
def auth_headers(make_token):
    return {"Authorization": f"Bearer {make_token(USER_ID)}"}


@pytest.fixture
def other_auth_headers(make_token):
    return {"Authorization": f"Bearer {make_token(OTHER_USER_ID)}"}
