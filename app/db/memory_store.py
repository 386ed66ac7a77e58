"""
In-Memory Store Adapter

Keeps mappings in a process-local dict. Nothing survives a restart and
nothing is shared between workers, so this is only for tests and quick
local runs.
"""

from typing import Dict, Optional

from app.db.interface import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Dict-backed key-value store."""

    name = "memory"

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value
