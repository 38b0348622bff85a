"""Cache protocol for the service layer.

Every method is fail-open: implementations log store errors and report
a miss or a no-op instead of raising.
"""

from typing import Any, Protocol


class CacheProtocol(Protocol):
    """Protocol for cache backends (e.g. Redis). Used by EntityCache and CacheInvalidator."""

    def is_available(self) -> bool:
        """Return True if a store client is configured."""
        ...

    async def get(self, key: str) -> Any | None:
        """Return cached value or None."""
        ...

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """Store value with a TTL in seconds."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Deleting a missing key is not an error."""
        ...

    async def keys(self, pattern: str) -> list[str]:
        """Return keys matching a glob-style pattern, or [] when unreachable."""
        ...

    async def delete_pattern(self, pattern: str) -> int:
        """Remove every key matching pattern and return how many were removed."""
        ...
