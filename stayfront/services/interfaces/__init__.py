"""
Service interfaces for swappable session storage.
"""

from .token_store import TokenStore
from .memory_token_store import MemoryTokenStore

__all__ = ['TokenStore', 'MemoryTokenStore']
