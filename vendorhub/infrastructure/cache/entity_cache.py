"""Per-entity read-through cache.

EntityCache binds the store adapter to one entity namespace and its TTL
and exposes the narrow capability interface services depend on:
fetch (read-through), get, set and the invalidation calls.

Payloads are typed. Values are dumped to JSON-compatible data with a
pydantic TypeAdapter before storing and validated with the same adapter
on the way back, so a corrupt or outdated entry is detected at the
boundary, deleted, and treated as a miss.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from pydantic import TypeAdapter, ValidationError

from vendorhub.infrastructure.cache.cache_protocol import CacheProtocol
from vendorhub.infrastructure.cache.invalidation import CacheInvalidator

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EntityCache:
    """Read-through cache policy for one entity namespace."""

    def __init__(
        self,
        cache: CacheProtocol | None,
        namespace: str,
        ttl: int,
        invalidator: CacheInvalidator | None = None,
    ) -> None:
        """Bind the adapter to a namespace.

        Args:
            cache: Store adapter; None disables caching (every read hits the database).
            namespace: Key prefix owned by this entity (e.g. "brands").
            ttl: Time-to-live in seconds for every entry written through this object.
            invalidator: Shared invalidator; one is created over cache when omitted.
        """
        self.cache = cache
        self.namespace = namespace
        self.ttl = ttl
        self.invalidator = invalidator or CacheInvalidator(cache)

    def _enabled(self) -> bool:
        return self.cache is not None and self.cache.is_available()

    async def get(self, key: str, adapter: TypeAdapter[T]) -> T | None:
        """Return the validated cached value for key, or None on miss or corruption."""
        if not self._enabled():
            return None
        raw = await self.cache.get(key)
        if raw is None:
            return None
        try:
            return adapter.validate_python(raw)
        except ValidationError as e:
            logger.warning(
                "Discarding cache entry %s: payload failed validation (%s errors)",
                key,
                e.error_count(),
            )
            await self.cache.delete(key)
            return None

    async def set(
        self, key: str, value: T, adapter: TypeAdapter[T], ttl: int | None = None
    ) -> bool:
        """Serialize value with adapter and store it under key with the namespace TTL."""
        if not self._enabled():
            return False
        payload = adapter.dump_python(value, mode="json")
        return await self.cache.set(key, payload, ttl=ttl or self.ttl)

    async def fetch(
        self,
        key: str,
        adapter: TypeAdapter[T],
        loader: Callable[[], Awaitable[T | None]],
        ttl: int | None = None,
    ) -> T | None:
        """Read-through: return the cached value, or load, store and return it.

        A hit never calls loader. On a miss, loader's result is stored unless
        it is None (not-found results are not cached). Exceptions raised by
        loader (database errors, domain errors) propagate unchanged.
        """
        cached = await self.get(key, adapter)
        if cached is not None:
            return cached
        value = await loader()
        if value is not None:
            await self.set(key, value, adapter, ttl=ttl)
        return value

    async def invalidate(self, *, cascade: bool = True) -> int:
        """Coarse invalidation of this namespace (and its dependents)."""
        return await self.invalidator.invalidate_namespace(self.namespace, cascade=cascade)

    async def invalidate_keys(self, *keys: str) -> int:
        """Targeted invalidation of exact keys."""
        return await self.invalidator.invalidate_keys(*keys)

    async def invalidate_pattern(self, pattern: str) -> int:
        """Targeted invalidation of keys matching pattern."""
        return await self.invalidator.invalidate_pattern(pattern)

    async def invalidate_namespace(self, namespace: str, *, cascade: bool = True) -> int:
        """Coarse invalidation of another namespace (cross-entity fan-out)."""
        return await self.invalidator.invalidate_namespace(namespace, cascade=cascade)
