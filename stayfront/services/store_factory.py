"""
Token store factory.
Configures where auth tokens are persisted.
"""

from typing import Optional

from stayfront.services.interfaces import TokenStore, MemoryTokenStore
from stayfront.services.token_store import RedisTokenStore
from stayfront.infrastructure.redis_client import get_redis
from stayfront.core.config import get_settings
from stayfront.core.logging import get_logger

logger = get_logger(__name__)


async def create_token_store() -> TokenStore:
    """
    Build the configured token store.

    TOKEN_STORE=redis needs REDIS_ENABLED and a reachable server; otherwise
    we fall back to the in-memory store so the site keeps working.
    """
    settings = get_settings()

    if settings.TOKEN_STORE == "redis":
        client = await get_redis()
        if client is not None:
            return RedisTokenStore(client)
        logger.warning("token_store_fallback", requested="redis", using="memory")

    return MemoryTokenStore()


# Singleton instance
_store: Optional[TokenStore] = None

async def get_token_store() -> TokenStore:
    """Get token store singleton."""
    global _store
    if _store is None:
        _store = await create_token_store()
    return _store
