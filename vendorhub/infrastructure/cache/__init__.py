"""Cache: Redis store adapter, key builders, entity read-through and invalidation.

CacheService is the only component that talks to Redis; EntityCache and
CacheInvalidator build the per-entity policies on top of it.
"""

from vendorhub.infrastructure.cache.cache_protocol import CacheProtocol
from vendorhub.infrastructure.cache.entity_cache import EntityCache
from vendorhub.infrastructure.cache.invalidation import (
    NAMESPACE_DEPENDENTS,
    CacheInvalidator,
)
from vendorhub.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "NAMESPACE_DEPENDENTS",
    "CacheInvalidator",
    "CacheProtocol",
    "CacheService",
    "EntityCache",
]
