"""
Redis caching service for listing search results.

CACHING STRATEGY
================

What we cache:
  - Search results from GET /listings, JSON-serialized
  - Cache key pattern: "listings:search:{sorted query string}"

Invalidation strategy:
  - Creating or deleting a listing through this site deletes every
    "listings:search:*" key
  - TTL-based expiry (LISTINGS_CACHE_TTL) covers changes made elsewhere

Listing detail pages and host dashboards are never cached; they must show
the current price and capacity before a booking is attempted.
"""

import json
from typing import Optional
from urllib.parse import urlencode

import redis.asyncio as redis
from stayfront.infrastructure.redis_client import get_redis
from stayfront.core.config import get_settings
from stayfront.core.logging import get_logger
from stayfront.core.metrics import record_cache_operation

logger = get_logger(__name__)

KEY_PREFIX = "listings:search:"


def make_search_key(params: dict[str, str]) -> str:
    return KEY_PREFIX + urlencode(sorted(params.items()))


async def get_cached_listings(params: dict[str, str]) -> Optional[list]:
    """Retrieve cached search results."""
    client = await get_redis()
    if not client:
        return None

    key = make_search_key(params)
    try:
        data = await client.get(key)
        record_cache_operation("get", hit=data is not None)
        if data:
            logger.debug("cache_hit", key=key)
            return json.loads(data)
        logger.debug("cache_miss", key=key)
    except redis.RedisError as e:
        logger.error("cache_get_error", key=key, error=str(e))

    return None


async def set_cached_listings(params: dict[str, str], listings: list) -> None:
    """Cache search results with TTL."""
    client = await get_redis()
    if not client:
        return

    ttl = get_settings().LISTINGS_CACHE_TTL
    key = make_search_key(params)
    try:
        await client.setex(key, ttl, json.dumps(listings))
        logger.debug("cache_set", key=key, ttl=ttl)
    except redis.RedisError as e:
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_listing_cache() -> None:
    """
    Invalidate all cached searches.
    Uses SCAN to find and delete all keys matching the prefix.
    """
    client = await get_redis()
    if not client:
        return

    try:
        deleted = 0
        async for key in client.scan_iter(match=KEY_PREFIX + "*", count=100):
            await client.delete(key)
            deleted += 1
        logger.info("cache_invalidated", keys_deleted=deleted)
    except redis.RedisError as e:
        logger.error("cache_invalidation_error", error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "status": "connected",
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
        }
    except redis.RedisError as e:
        return {"status": "error", "error": str(e)}
