"""
Per-browser session passed explicitly to every API call.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from stayfront.services.interfaces import TokenStore


@dataclass
class Session:
    id: str
    store: TokenStore
    token: Optional[str] = None

    @classmethod
    async def load(cls, store: TokenStore, session_id: Optional[str] = None) -> "Session":
        """Resume a session by cookie value, or start a new anonymous one."""
        if not session_id:
            return cls(id=new_session_id(), store=store)
        return cls(id=session_id, store=store, token=await store.get(session_id))

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    async def set_token(self, token: str):
        self.token = token
        await self.store.set(self.id, token)

    async def clear_token(self):
        self.token = None
        await self.store.clear(self.id)

    async def rotate(self):
        """
        Move the session to a fresh id. Called on login so a token is never
        stored under an id the browser chose.
        """
        await self.store.clear(self.id)
        self.id = new_session_id()
        if self.token:
            await self.store.set(self.id, self.token)


def new_session_id() -> str:
    return uuid.uuid4().hex
