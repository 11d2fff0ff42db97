"""Redis caching utilities for Carobar.

Reference data changes rarely but is read on every form load, so hot lists
(chart of accounts, the lists in `carobar.reference.service`) go through a
get-or-fetch cache. Callers own their keys and must invalidate them after
writes. Tenant lists embed the company id in the key.

Redis being unavailable never fails a request: reads fall back to the
database and the failure is logged.
"""

import json
import logging
from typing import Any, Awaitable, Callable, Optional

import redis.asyncio as redis

from carobar.config import settings

logger = logging.getLogger(__name__)

# Global Redis connection pool
_redis_client: Optional[redis.Redis] = None


async def get_redis() -> redis.Redis:
    """Get or create Redis client connection."""
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
            max_connections=50,
        )
    return _redis_client


async def close_redis():
    """Close Redis connection (call on app shutdown)."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


async def get_or_fetch(
    key: str,
    fetch: Callable[[], Awaitable[Any]],
    ttl: int | None = None,
) -> Any:
    """Return the cached JSON value under `key`, or call `fetch` and store it.

    Args:
        key: Full cache key, e.g. "chart-of-accounts:<company_id>"
        fetch: Coroutine factory producing a JSON-serializable value
        ttl: Time-to-live in seconds (default: settings.reference_cache_ttl_seconds)

    Example:
        accounts = await get_or_fetch(
            f"chart-of-accounts:{company_id}",
            lambda: load_accounts(db, company_id),
        )
    """
    ttl = ttl or settings.reference_cache_ttl_seconds
    try:
        redis_client = await get_redis()
        cached_value = await redis_client.get(key)
        if cached_value is not None:
            logger.debug(f"Cache HIT: {key}")
            return json.loads(cached_value)
    except redis.RedisError as e:
        logger.warning(f"Redis error (falling back to uncached): {e}")
        return await fetch()

    logger.debug(f"Cache MISS: {key}")
    result = await fetch()

    try:
        await redis_client.setex(key, ttl, json.dumps(result))
    except redis.RedisError as e:
        logger.warning(f"Failed to store cache key {key}: {e}")

    return result


async def invalidate_cache(*keys: str):
    """Drop one or more exact cache keys.

    Example:
        await invalidate_cache(f"chart-of-accounts:{company_id}")
    """
    if not keys:
        return
    try:
        redis_client = await get_redis()
        removed = await redis_client.delete(*keys)
        logger.info(f"Invalidated {removed} cache key(s): {', '.join(keys)}")
    except redis.RedisError as e:
        logger.warning(f"Failed to invalidate cache: {e}")
