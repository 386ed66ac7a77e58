"""
Shared fixtures for the webhook proxy tests.

The API tests never touch Redis, the local JSON file or Discord:
- the store is an InMemoryStore injected through dependency overrides
- the outbound client uses httpx.MockTransport and records every request
"""

from typing import List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.rate_limit import limiter
from app.db.interface import KeyValueStore
from app.db.memory_store import InMemoryStore
from app.db.session import get_http_client, get_store
from app.main import app

WEBHOOK_URL = "https://discord.com/api/webhooks/123/abc"


class UpstreamRecorder:
    """Mock webhook endpoint: records requests, answers with a fixed status."""

    def __init__(self, status_code: int = 204):
        self.status_code = status_code
        self.error: Optional[Exception] = None
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text='{"message": "upstream detail"}')


class FailingStore(KeyValueStore):
    """Store whose every operation fails."""

    name = "failing"

    def __init__(self, fail_get: bool = True, fail_set: bool = True):
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.writes = 0

    async def get(self, key):
        if self.fail_get:
            raise ConnectionError("store unreachable")
        return None

    async def set(self, key, value):
        self.writes += 1
        if self.fail_set:
            raise ConnectionError("store unreachable")


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def upstream() -> UpstreamRecorder:
    return UpstreamRecorder()


@pytest.fixture
def http_client(upstream) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))


@pytest.fixture
def client(store, http_client):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_http_client] = lambda: http_client
    yield TestClient(app)
    app.dependency_overrides.clear()
