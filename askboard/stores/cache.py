"""Cache backend abstraction.

The question cache depends on this protocol only; the concrete backend is
chosen from settings and injected by the route dependencies.
"""

from functools import lru_cache
from typing import Protocol

from askboard.settings import get_settings
from askboard.stores.memory import MemoryCache
from askboard.stores.redis import RedisCache


class CacheBackend(Protocol):
    """String key-value store with TTL semantics."""

    async def get(self, key: str) -> str | None:
        """Return the stored value, or None if absent or expired."""
        ...

    async def set(self, key: str, value: str, ttl: int) -> None:
        """Store value for `ttl` seconds."""
        ...

    async def delete(self, key: str) -> None:
        """Remove key (no error if absent)."""
        ...

    async def expire(self, key: str, ttl: int) -> None:
        """Reset the TTL of an existing key."""
        ...


@lru_cache
def get_cache_backend() -> CacheBackend:
    """Get the configured cache backend (one instance per process)."""
    if get_settings().cache_backend == "memory":
        return MemoryCache()
    return RedisCache()
