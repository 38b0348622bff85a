"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

The engine and session factory are created lazily on first use (get_db)
so import does not trigger Settings validation. Any SQLAlchemy async URL
works; deployments use postgresql+asyncpg.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from vendorhub.core.config import get_settings

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: AsyncEngine | None = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory used by the app and by tests (objects stay usable after commit)."""
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    kwargs: dict[str, Any] = {"echo": settings.database_echo, "pool_pre_ping": True}
    if settings.database_url.startswith("postgresql"):
        kwargs["pool_size"] = settings.db_pool_size or 20
        kwargs["max_overflow"] = settings.db_max_overflow or 30
        kwargs["pool_recycle"] = 3600
    engine = create_async_engine(settings.database_url, **kwargs)
    AsyncSessionLocal = create_session_factory(engine)
    logger.info("Database engine created")


async def create_tables() -> None:
    """Create missing tables for every registered model (app startup)."""
    import vendorhub.infrastructure.persistence.models  # noqa: F401

    _ensure_engine()
    assert engine is not None
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def dispose_engine() -> None:
    """Dispose the engine (app shutdown)."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
        engine = None
        AsyncSessionLocal = None
        logger.info("Database engine disposed")


async def get_db() -> AsyncIterator[AsyncSession]:
    """Database session dependency.

    Services commit their own writes before invalidating the cache, so the
    session is not wrapped in a transaction here. Uncommitted work is
    rolled back when the session closes.
    """
    _ensure_engine()
    assert AsyncSessionLocal is not None
    async with AsyncSessionLocal() as session:
        yield session
