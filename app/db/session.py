"""
Store Selection and Request Access

This module resolves the key-value backend once at startup and hands it to
request handlers through FastAPI dependencies.

The store adapter pattern allows us to:
- Use a JSON file by default in development (no server required)
- Switch to Redis in production by configuration only
- Swap in an in-memory store for tests via dependency overrides
"""

import logging
from typing import Optional

import httpx
from fastapi import Request

from app.core.setting import Settings, StoreBackend, settings
from app.db.file_store import JSONFileStore
from app.db.interface import KeyValueStore
from app.db.memory_store import InMemoryStore
from app.db.redis_store import RedisStore

logger = logging.getLogger(__name__)


def build_store(config: Optional[Settings] = None) -> KeyValueStore:
    """
    Factory function to get the configured store.

    Args:
        config: Settings to read (default: global settings)

    Returns:
        KeyValueStore instance

    Raises:
        ValueError: If the redis backend is selected without KV_URL
    """
    config = config or settings
    backend = config.store_backend

    if backend is StoreBackend.redis:
        if not config.KV_URL:
            raise ValueError("KV_URL must be set to use the redis store backend")
        logger.info("Using Redis store for proxy mappings")
        return RedisStore.from_url(config.KV_URL)

    if backend is StoreBackend.memory:
        logger.info("Using in-memory store for proxy mappings")
        return InMemoryStore()

    logger.info(f"Using file store for proxy mappings ({config.LOCAL_DB_PATH})")
    return JSONFileStore(config.LOCAL_DB_PATH)


def build_http_client(config: Optional[Settings] = None) -> httpx.AsyncClient:
    """Shared client for relaying payloads to webhooks."""
    config = config or settings
    return httpx.AsyncClient(timeout=config.FORWARD_TIMEOUT_SECONDS)


def get_store(request: Request) -> KeyValueStore:
    """
    Dependency function for FastAPI to get the key-value store.

    Usage in FastAPI:
        @router.post("/endpoint")
        async def endpoint(store: KeyValueStore = Depends(get_store)):
            ...
    """
    return request.app.state.store


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Dependency function for FastAPI to get the outbound HTTP client."""
    return request.app.state.http_client
