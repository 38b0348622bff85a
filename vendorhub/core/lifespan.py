"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (tables, Redis cache, HTTP clients,
DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from vendorhub.core.config import get_settings
from vendorhub.infrastructure.cache.redis_cache import CacheService
from vendorhub.infrastructure.external import IfscClient
from vendorhub.infrastructure.persistence.database import create_tables, dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: database tables (if enabled), the Redis cache (if enabled), then
    the IFSC client. A cache that cannot connect serves every read from the
    database until a retry PING succeeds.
    Shutdown: IFSC client close, cache disconnect, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    if settings.database_create_tables:
        await create_tables()

    if settings.redis_enabled:
        cache = CacheService(settings=settings)
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None
        logger.info("Redis disabled; serving every read from the database")

    app.state.ifsc_client = IfscClient(settings.ifsc_api_url, timeout=settings.ifsc_timeout)

    yield

    # ---- Shutdown ----
    await app.state.ifsc_client.aclose()

    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    await dispose_engine()
    logger.info("Database engine disposed")
