"""
Token store interface.
Allows swapping where per-browser auth tokens are persisted.
"""

from abc import ABC, abstractmethod
from typing import Optional


class TokenStore(ABC):
    """
    Interface for auth token persistence, keyed by browser session id.

    Implementations:
    - MemoryTokenStore: process-local dict, for development and tests
    - RedisTokenStore: shared across workers, tokens expire with SESSION_TTL
    """

    @abstractmethod
    async def get(self, session_id: str) -> Optional[str]:
        """Return the stored token, or None when the session is logged out."""
        pass

    @abstractmethod
    async def set(self, session_id: str, token: str):
        pass

    @abstractmethod
    async def clear(self, session_id: str):
        pass
