"""
Storage module with abstraction layer.

This module provides:
- KeyValueStore interface: Abstract base class for store implementations
- InMemoryStore, JSONFileStore, RedisStore: concrete backends
- build_store: picks the backend from settings at startup
- get_store: FastAPI dependency returning the active store

To add a new backend:
1. Create a new adapter class inheriting from KeyValueStore
2. Implement get and set
3. Update build_store() in session.py to return the new adapter
"""

from app.db.interface import KeyValueStore
from app.db.memory_store import InMemoryStore
from app.db.file_store import JSONFileStore
from app.db.redis_store import RedisStore
from app.db.session import build_store, build_http_client, get_store, get_http_client

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "JSONFileStore",
    "RedisStore",
    "build_store",
    "build_http_client",
    "get_store",
    "get_http_client",
]
