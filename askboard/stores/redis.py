"""Redis store for caching.

Handles:
- Connection lifecycle (one client per process, opened in the app lifespan)
- Generic string cache operations with TTL
- RedisCache: the CacheBackend used by the question cache in production

TTL policies:
- Question list page: 10 minutes
- Question detail page: 10 minutes
"""

import logging

import redis.asyncio as redis

from askboard.settings import get_settings

# Redis client (initialized on startup)
_redis: redis.Redis | None = None
logger = logging.getLogger("uvicorn.error")


async def init_redis() -> None:
    """Initialize Redis connection."""
    global _redis
    settings = get_settings()
    _redis = redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )
    # Validate connectivity early (especially for `rediss://` in production).
    await _redis.ping()
    logger.info("Redis connected")


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def _get_redis() -> redis.Redis:
    """Get Redis client instance."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


# ============================================================
# Generic cache operations
# ============================================================


async def cache_get(key: str) -> str | None:
    """Get value from cache.

    Args:
        key: Cache key.

    Returns:
        Cached value or None if not found (or expired).
    """
    return await _get_redis().get(key)


async def cache_set(key: str, value: str, ttl: int) -> None:
    """Set value in cache with TTL.

    Args:
        key: Cache key.
        value: Value to cache.
        ttl: Time-to-live in seconds.
    """
    await _get_redis().setex(key, ttl, value)


async def cache_delete(key: str) -> None:
    """Delete value from cache.

    Args:
        key: Cache key.
    """
    await _get_redis().delete(key)


async def cache_expire(key: str, ttl: int) -> None:
    """Reset the TTL of an existing key (no-op when the key is absent)."""
    await _get_redis().expire(key, ttl)


class RedisCache:
    """CacheBackend over the process-wide Redis client.

    Expiry is enforced by Redis itself (SETEX), so an expired key reads as a miss.
    """

    async def get(self, key: str) -> str | None:
        return await cache_get(key)

    async def set(self, key: str, value: str, ttl: int) -> None:
        await cache_set(key, value, ttl)

    async def delete(self, key: str) -> None:
        await cache_delete(key)

    async def expire(self, key: str, ttl: int) -> None:
        await cache_expire(key, ttl)
