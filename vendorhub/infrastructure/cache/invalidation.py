"""Cache invalidation: namespace dependency graph and bulk delete helpers.

A namespace that embeds data owned by another namespace registers itself
as a dependent of that namespace here. Coarse invalidation of a namespace
then also clears every namespace that transitively depends on it, so a
rename of a parent category reaches the cached secondary categories,
products, discounts and the dropdown that show its name.

Dashboard metrics are invalidated per vendor by DashboardService, not
through this graph.
"""

import logging
from collections.abc import Iterable, Mapping

from vendorhub.core.constants import (
    CACHE_PREFIX_ATTRIBUTES,
    CACHE_PREFIX_BRANDS,
    CACHE_PREFIX_DISCOUNTS,
    CACHE_PREFIX_DROPDOWN,
    CACHE_PREFIX_PARENT_CATEGORIES,
    CACHE_PREFIX_PRIMARY_CATEGORIES,
    CACHE_PREFIX_PRODUCTS,
    CACHE_PREFIX_REFERRALS,
    CACHE_PREFIX_SECONDARY_CATEGORIES,
    CACHE_PREFIX_USERS,
)
from vendorhub.infrastructure.cache.cache_protocol import CacheProtocol
from vendorhub.infrastructure.cache.keys import namespace_pattern

logger = logging.getLogger(__name__)

# namespace -> namespaces whose cached payloads embed its data
NAMESPACE_DEPENDENTS: dict[str, tuple[str, ...]] = {
    CACHE_PREFIX_ATTRIBUTES: (
        CACHE_PREFIX_SECONDARY_CATEGORIES,
        CACHE_PREFIX_PRODUCTS,
        CACHE_PREFIX_DROPDOWN,
    ),
    CACHE_PREFIX_BRANDS: (CACHE_PREFIX_PRODUCTS,),
    CACHE_PREFIX_PARENT_CATEGORIES: (
        CACHE_PREFIX_PRIMARY_CATEGORIES,
        CACHE_PREFIX_SECONDARY_CATEGORIES,
        CACHE_PREFIX_PRODUCTS,
        CACHE_PREFIX_DISCOUNTS,
        CACHE_PREFIX_DROPDOWN,
    ),
    CACHE_PREFIX_PRIMARY_CATEGORIES: (
        CACHE_PREFIX_SECONDARY_CATEGORIES,
        CACHE_PREFIX_PRODUCTS,
        CACHE_PREFIX_DROPDOWN,
    ),
    CACHE_PREFIX_SECONDARY_CATEGORIES: (
        CACHE_PREFIX_PRODUCTS,
        CACHE_PREFIX_DROPDOWN,
    ),
    CACHE_PREFIX_USERS: (CACHE_PREFIX_DISCOUNTS, CACHE_PREFIX_REFERRALS),
}


class CacheInvalidator:
    """Deletes cache entries after writes: whole namespaces, keys or patterns.

    All methods are fail-open (the adapter logs and swallows store errors)
    and idempotent: invalidating already-empty state deletes nothing and
    raises nothing.
    """

    def __init__(
        self,
        cache: CacheProtocol | None,
        dependents: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        self.cache = cache
        self.dependents = NAMESPACE_DEPENDENTS if dependents is None else dependents

    def _enabled(self) -> bool:
        return self.cache is not None and self.cache.is_available()

    def affected_namespaces(self, namespace: str, *, cascade: bool = True) -> list[str]:
        """Return namespace followed by its transitive dependents (each once, in BFS order)."""
        ordered = [namespace]
        if not cascade:
            return ordered
        seen = {namespace}
        index = 0
        while index < len(ordered):
            for dependent in self.dependents.get(ordered[index], ()):
                if dependent not in seen:
                    seen.add(dependent)
                    ordered.append(dependent)
            index += 1
        return ordered

    async def invalidate_namespace(self, namespace: str, *, cascade: bool = True) -> int:
        """Coarse invalidation: delete <namespace>:* and, by default, its dependents.

        Returns:
            Total number of keys deleted.
        """
        if not self._enabled():
            return 0
        deleted = 0
        for ns in self.affected_namespaces(namespace, cascade=cascade):
            deleted += await self.cache.delete_pattern(namespace_pattern(ns))
        logger.debug("Invalidated namespace %s (%s keys)", namespace, deleted)
        return deleted

    async def invalidate_keys(self, *keys: str) -> int:
        """Targeted invalidation of exact keys. Returns how many deletes succeeded."""
        if not self._enabled():
            return 0
        deleted = 0
        for key in dict.fromkeys(keys):
            if await self.cache.delete(key):
                deleted += 1
        return deleted

    async def invalidate_pattern(self, pattern: str) -> int:
        """Targeted invalidation of every key matching a glob pattern."""
        if not self._enabled():
            return 0
        return await self.cache.delete_pattern(pattern)
