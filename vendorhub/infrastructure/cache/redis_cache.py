"""Redis-based cache store adapter.

The sole point of contact with the key-value store. Values are JSON
encoded, stored with SETEX and decoded on read. Every store, network or
serialization failure is logged and converted to a miss (get), a False
(set/delete), an empty list (keys) or 0 (delete_pattern); nothing here
raises to callers.

The redis.asyncio client is created once (or injected) and owned by the
application lifespan: connect() at startup, disconnect() at shutdown.
A failed PING or store error marks the cache down for
redis_retry_interval seconds; the next operation after that re-checks the
server and resumes caching once it answers.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import redis.asyncio as redis

from vendorhub.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Errors that mean "store unusable right now". OSError covers sockets
# failing below redis-py's own exception mapping.
_STORE_ERRORS = (redis.RedisError, OSError)

_UNLINK_CHUNK_SIZE = 500


class CacheService:
    """Async Redis cache adapter with TTL support.

    Call connect() at startup and disconnect() at shutdown. Tests pass an
    injected client (e.g. fakeredis) and may skip connect().
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._down_until: float | None = None

    async def connect(self) -> None:
        """Create the client (unless injected) and verify it with PING.

        When the server cannot be reached the client is kept but marked
        down; every operation degrades to a miss until a later PING succeeds.
        """
        if self.redis is None:
            password = self.settings.redis_password
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=password.get_secret_value() if password else None,
                decode_responses=True,
                socket_connect_timeout=self.settings.redis_socket_timeout,
                socket_timeout=self.settings.redis_socket_timeout,
                socket_keepalive=True,
            )
        try:
            await self.redis.ping()
        except _STORE_ERRORS as e:
            logger.warning(
                "Redis connection failed: %s. Cache disabled, retrying in %ss.",
                e,
                self.settings.redis_retry_interval,
            )
            self._mark_down()
            return
        self._down_until = None
        logger.info(
            "Redis cache connected: %s:%s",
            self.settings.redis_host,
            self.settings.redis_port,
        )

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        self._down_until = None
        if self.redis is not None:
            client, self.redis = self.redis, None
            try:
                await client.aclose()
            except _STORE_ERRORS as e:
                logger.warning("Redis close failed: %s", e)
            logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        """Return True if a client is configured and not waiting out a failure."""
        if self.redis is None:
            return False
        return self._down_until is None or time.monotonic() >= self._down_until

    def _mark_down(self) -> None:
        self._down_until = time.monotonic() + self.settings.redis_retry_interval

    def _store_failed(self, operation: str, target: str, error: Exception) -> None:
        logger.warning("Cache %s unavailable for %s: %s", operation, target, error)
        self._mark_down()

    async def _ready(self) -> bool:
        """True when commands may be sent; PINGs first when a retry is due."""
        if not self.is_available():
            return False
        if self._down_until is None:
            return True
        try:
            await self.redis.ping()
        except _STORE_ERRORS as e:
            logger.warning("Redis still unreachable: %s", e)
            self._mark_down()
            return False
        self._down_until = None
        logger.info("Redis cache reconnected")
        return True

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable.

        Args:
            key: Cache key (use vendorhub.infrastructure.cache.keys builders).

        Returns:
            Cached value or None.
        """
        if not await self._ready():
            return None
        try:
            value = await self.redis.get(key)
        except UnicodeDecodeError:
            logger.warning("Cache entry for key %s is not valid UTF-8; discarding", key)
            await self.delete(key)
            return None
        except _STORE_ERRORS as e:
            self._store_failed("get", key, e)
            return None
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            decoded = json.loads(value)
        except (TypeError, ValueError):
            logger.warning("Cache entry for key %s is not valid JSON; treating as miss", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return decoded

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """Store value with TTL. Returns True on success.

        Args:
            key: Cache key.
            value: Value to cache (JSON-serializable).
            ttl: Time-to-live in seconds.

        Returns:
            True if stored, False otherwise.
        """
        if not await self._ready():
            return False
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError):
            logger.warning("Cache value for key %s is not JSON-serializable; not cached", key)
            return False
        try:
            await self.redis.setex(key, ttl, serialized)
        except _STORE_ERRORS as e:
            self._store_failed("set", key, e)
            return False
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True unless the store failed.

        Args:
            key: Cache key to delete.

        Returns:
            True if the delete was issued, False otherwise.
        """
        if not await self._ready():
            return False
        try:
            await self.redis.delete(key)
        except _STORE_ERRORS as e:
            self._store_failed("delete", key, e)
            return False
        logger.debug("Cache DELETE: %s", key)
        return True

    async def keys(self, pattern: str) -> list[str]:
        """Return all keys matching pattern, using SCAN so the server never blocks.

        Args:
            pattern: Redis glob pattern (e.g. brands:*).

        Returns:
            Matching keys, or [] when the store is unreachable or a key
            name is not valid UTF-8.
        """
        if not await self._ready():
            return []
        try:
            return [key async for key in self.redis.scan_iter(match=pattern)]
        except UnicodeDecodeError:
            logger.warning("Cache keys for %s include a non UTF-8 key name; skipping", pattern)
            return []
        except _STORE_ERRORS as e:
            self._store_failed("keys", pattern, e)
            return []

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern in batched UNLINKs (non-blocking).

        Args:
            pattern: Redis SCAN match pattern (e.g. discounts:vendor:v1:*).

        Returns:
            Number of keys deleted.
        """
        matched = await self.keys(pattern)
        if not matched:
            return 0
        deleted = 0
        try:
            for start in range(0, len(matched), _UNLINK_CHUNK_SIZE):
                chunk = matched[start : start + _UNLINK_CHUNK_SIZE]
                async with self.redis.pipeline(transaction=False) as pipe:
                    pipe.unlink(*chunk)
                    results = await pipe.execute()
                deleted += sum(int(r or 0) for r in results)
        except _STORE_ERRORS as e:
            self._store_failed("delete_pattern", pattern, e)
            return deleted
        if deleted > 0:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
        return deleted
