"""
Notekeeper Backend - Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine, provides a per-request session that commits
       on success and rolls back on error.
Who:   Used by the dependency wiring in notekeeper/deps.py.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling:
    PostgreSQL (asyncpg): pool_size / max_overflow / pre_ping from settings,
    connections recycled every hour.
    SQLite (aiosqlite): SQLAlchemy's default pool for the dialect; pool sizing
    arguments are not accepted there and are left out.
"""

from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import DateTime
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator

from notekeeper.config import settings


def engine_options(database_url: str) -> Dict[str, Any]:
    """Keyword arguments for create_async_engine() suited to the URL's backend."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if database_url.startswith("sqlite"):
        return options
    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
    )
    return options


engine = create_async_engine(settings.database_url, **engine_options(settings.database_url))

# expire_on_commit=False keeps attributes readable after the request commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC timestamp on every backend.

    PostgreSQL keeps the offset itself; SQLite stores the wall-clock value
    only and reads it back naive. Values are normalised to UTC on the way in
    and naive values are marked as UTC on the way out, so a record reads the
    same whether it came from an INSERT, a SELECT or an UPDATE ... RETURNING.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models, Alembic and the test
    suite's `create_all`.
    """
    pass


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the stores built for this request
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handler
        5. Always: closes the session (returns connection to pool)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def dispose_engine() -> None:
    """Close all pooled connections; called from the lifespan on shutdown."""
    await engine.dispose()
