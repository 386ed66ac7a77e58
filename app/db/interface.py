"""
Key-Value Store Abstraction Interface

This module defines the storage abstraction that allows switching between
backends (in-memory, JSON file, Redis) without changing the rest of the
codebase.

Contract shared by every adapter:
- A get issued after a completed set for the same key, with no external
  mutation in between, observes the written value
- No ordering or atomicity across different keys
- Concurrent writers to the same key: last writer wins
- Adapters do not lock; consistency beyond that is the backend's business
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract base class for key-value store adapters.

    To add a new backend:
    1. Create a new class inheriting from KeyValueStore
    2. Implement get and set (and close if it holds connections)
    3. Teach build_store() in app/db/session.py to return it
    """

    name: str = "abstract"

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under key.

        Returns:
            The stored string, or None if the key is absent
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    async def close(self) -> None:
        """Release backend resources."""
        return None
