"""
Async Redis connection shared by the token store and the listing cache.
Separated from business logic for clean architecture.

A failed ping is remembered for REDIS_RETRY_BACKOFF seconds; during that
window callers get None straight away instead of waiting on a connect
timeout per request.
"""

import time
from typing import Optional

import redis.asyncio as redis
from stayfront.core.config import get_settings
from stayfront.core.logging import get_logger

logger = get_logger(__name__)

_redis_client: Optional[redis.Redis] = None
_last_failure: Optional[float] = None
_clock = time.monotonic


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled or unreachable."""
    global _redis_client, _last_failure
    settings = get_settings()

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        if _last_failure is not None and _clock() - _last_failure < settings.REDIS_RETRY_BACKOFF:
            return None

        client = redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
        )
        try:
            await client.ping()
        except redis.RedisError as e:
            _last_failure = _clock()
            logger.error("redis_connection_failed", error=str(e), retry_in=settings.REDIS_RETRY_BACKOFF)
            await client.aclose()
            return None
        _redis_client = client
        _last_failure = None
        logger.info("redis_connected", url=settings.REDIS_URL)

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client, _last_failure
    _last_failure = None
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None
