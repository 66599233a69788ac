"""In-process cache backend.

Used when CACHE_BACKEND=memory (single-process deployments, local runs without
Redis). Entries carry an absolute expiry instant from a monotonic clock. An
expired entry is dropped when it is read, and every write sweeps all expired
entries, so keys nobody reads again do not accumulate.
"""

from collections.abc import Callable
from dataclasses import dataclass
import time


@dataclass
class CacheEntry:
    value: str
    expires_at: float


class MemoryCache:
    """Dict-backed CacheBackend with per-entry TTL."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            # Expired entries are indistinguishable from absent ones.
            del self._entries[key]
            return None
        return entry.value

    async def set(self, key: str, value: str, ttl: int) -> None:
        now = self._clock()
        self._sweep(now)
        self._entries[key] = CacheEntry(value=value, expires_at=now + ttl)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def expire(self, key: str, ttl: int) -> None:
        entry = self._entries.get(key)
        if entry is not None and self._clock() < entry.expires_at:
            entry.expires_at = self._clock() + ttl

    def _sweep(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
        for key in expired:
            del self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)
