"""
JSON File Store Adapter

This module implements the KeyValueStore interface on top of a single
JSON document on disk.

Key characteristics:
- Every set reads the whole file, updates one key and rewrites the file
- A missing or unreadable file reads as an empty mapping
- No locking: two processes writing at once can lose updates

That makes it a stand-in for local development only. Production
deployments need a backend with real per-key operations (Redis).
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from app.db.interface import KeyValueStore

logger = logging.getLogger(__name__)


class JSONFileStore(KeyValueStore):
    """
    File-backed key-value store.

    File I/O runs in a worker thread so the event loop is not blocked
    while the document is read or rewritten.
    """

    name = "file"

    def __init__(self, path: Union[str, Path]):
        """
        Args:
            path: Location of the JSON document (created on first write)
        """
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {self.path}, treating it as empty: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write_one(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    async def get(self, key: str) -> Optional[str]:
        data = await asyncio.to_thread(self._read_all)
        return data.get(key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write_one, key, value)
