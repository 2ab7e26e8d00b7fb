"""
Daybook Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine construction, session factory, and the
       per-request session dependency.
Why:   Centralizes all database connection logic in one place.
How:   The application lifespan calls `init_engine()` once at startup and
       stores the engine and session factory on `app.state`; the
       `get_db_session` dependency opens one session per request from there
       and commits on success, rolls back on error. `dispose_engine()` closes
       the pool on shutdown.

Nothing here is created at import time, so tests can point the app at a
different database by overriding `get_db_session`.

Connection Pooling Strategy:
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import Settings

logger = logging.getLogger(__name__)

# Owner identities are token claims; longer ones are refused at authentication.
USER_ID_MAX_LENGTH = 255


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object; Alembic reads it for migrations.
    """
    pass


def init_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database URL.

    SQLite URLs (used by the test suite and local experiments) get no pool
    sizing arguments, since aiosqlite does not use a sized queue pool.
    """
    kwargs = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.database_url.startswith("sqlite"):
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=3600,
        )
    engine = create_async_engine(settings.database_url, **kwargs)
    logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: records are serialized after the commit
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the factory stored on app.state at startup
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handler
        5. Always: closes the session (returns connection to pool)
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def dispose_engine(engine: AsyncEngine) -> None:
    """Gracefully closes all connections in the pool. Called on shutdown."""
    await engine.dispose()
