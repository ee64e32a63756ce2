"""
In-process token store.
Nothing is shared between workers. Entries expire after SESSION_TTL, like
the session cookie, and expired entries are swept on every write.
"""

import time
from typing import Callable, Optional

from stayfront.core.config import get_settings
from stayfront.services.interfaces.token_store import TokenStore


class MemoryTokenStore(TokenStore):

    def __init__(self, ttl: Optional[int] = None, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl or get_settings().SESSION_TTL
        self._clock = clock
        self._tokens: dict[str, tuple[str, float]] = {}

    async def get(self, session_id: str) -> Optional[str]:
        entry = self._tokens.get(session_id)
        if entry is None:
            return None
        token, expires_at = entry
        if expires_at <= self._clock():
            del self._tokens[session_id]
            return None
        return token

    async def set(self, session_id: str, token: str):
        now = self._clock()
        self._tokens = {k: v for k, v in self._tokens.items() if v[1] > now}
        self._tokens[session_id] = (token, now + self.ttl)

    async def clear(self, session_id: str):
        self._tokens.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._tokens)
