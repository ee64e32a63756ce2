"""
Redis-backed token store.

Circuit Breaker Pattern:
  On Redis failure reads behave as "no token" and writes are dropped.
  The user sees a logged-out page and can log in again; a Redis outage
  never turns into a 500 on every page.
"""

from typing import Optional

import redis.asyncio as redis

from stayfront.services.interfaces.token_store import TokenStore
from stayfront.core.config import get_settings
from stayfront.core.logging import get_logger

logger = get_logger(__name__)


class RedisTokenStore(TokenStore):
    """Tokens under ``session:token:{session_id}`` with SESSION_TTL expiry."""

    def __init__(self, client: redis.Redis, ttl: Optional[int] = None):
        self.redis = client
        self.ttl = ttl or get_settings().SESSION_TTL

    @staticmethod
    def _key(session_id: str) -> str:
        return f"session:token:{session_id}"

    async def get(self, session_id: str) -> Optional[str]:
        try:
            return await self.redis.get(self._key(session_id))
        except redis.RedisError as e:
            logger.error("token_store_get_error", error=str(e))
            return None

    async def set(self, session_id: str, token: str):
        try:
            await self.redis.setex(self._key(session_id), self.ttl, token)
        except redis.RedisError as e:
            logger.error("token_store_set_error", error=str(e))

    async def clear(self, session_id: str):
        try:
            await self.redis.delete(self._key(session_id))
        except redis.RedisError as e:
            logger.error("token_store_clear_error", error=str(e))
