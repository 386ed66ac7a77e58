"""Tests for the forwarding service."""

import json

import httpx
import pytest

from app.core.exceptions import (
    MissingProxyIdError,
    ProxyNotFoundError,
    StorageReadError,
    UpstreamForwardError,
)
from app.db.memory_store import InMemoryStore
from app.services.forwarding_service import ForwardingService

from tests.conftest import WEBHOOK_URL, FailingStore


@pytest.fixture
def registered_store():
    return InMemoryStore({"webhook:abc12345": WEBHOOK_URL})


class TestResolve:
    """Test proxy ID lookup."""

    @pytest.mark.asyncio
    async def test_resolves_registered_id(self, registered_store, http_client):
        service = ForwardingService(registered_store, http_client, key_prefix="webhook:")
        mapping = await service.resolve("abc12345")
        assert mapping.proxy_id == "abc12345"
        assert mapping.webhook_url == WEBHOOK_URL

    @pytest.mark.asyncio
    async def test_missing_id_never_reads_store(self, http_client):
        service = ForwardingService(FailingStore(), http_client)
        for proxy_id in ["", "   ", None]:
            with pytest.raises(MissingProxyIdError):
                await service.resolve(proxy_id)

    @pytest.mark.asyncio
    async def test_unknown_id(self, registered_store, http_client):
        service = ForwardingService(registered_store, http_client, key_prefix="webhook:")
        with pytest.raises(ProxyNotFoundError):
            await service.resolve("zzzzzzzz")

    @pytest.mark.asyncio
    async def test_looks_up_path_segment_verbatim(self, registered_store, http_client):
        service = ForwardingService(registered_store, http_client, key_prefix="webhook:")
        with pytest.raises(ProxyNotFoundError):
            await service.resolve(" abc12345")

    @pytest.mark.asyncio
    async def test_store_failure(self, http_client):
        service = ForwardingService(FailingStore(), http_client)
        with pytest.raises(StorageReadError):
            await service.resolve("abc12345")


class TestForward:
    """Test relaying payloads."""

    @pytest.mark.asyncio
    async def test_relays_payload_as_json(self, registered_store, http_client, upstream):
        service = ForwardingService(registered_store, http_client, key_prefix="webhook:")

        await service.forward("abc12345", {"content": "hi"})

        assert len(upstream.requests) == 1
        sent = upstream.requests[0]
        assert sent.method == "POST"
        assert str(sent.url) == WEBHOOK_URL
        assert sent.headers["content-type"] == "application/json"
        assert json.loads(sent.content) == {"content": "hi"}

    @pytest.mark.asyncio
    async def test_relays_non_object_json(self, registered_store, http_client, upstream):
        service = ForwardingService(registered_store, http_client, key_prefix="webhook:")
        await service.forward("abc12345", [1, 2, 3])
        assert json.loads(upstream.requests[0].content) == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_unknown_id_makes_no_outbound_call(self, registered_store, http_client, upstream):
        service = ForwardingService(registered_store, http_client, key_prefix="webhook:")

        with pytest.raises(ProxyNotFoundError):
            await service.forward("zzzzzzzz", {"content": "hi"})
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_non_2xx_upstream(self, registered_store, http_client, upstream):
        upstream.status_code = 400
        service = ForwardingService(registered_store, http_client, key_prefix="webhook:")

        with pytest.raises(UpstreamForwardError) as exc_info:
            await service.forward("abc12345", {"content": "hi"})
        assert exc_info.value.status_code == 400
        assert "upstream detail" not in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_network_error(self, registered_store, http_client, upstream):
        upstream.error = httpx.ConnectError("connection refused")
        service = ForwardingService(registered_store, http_client, key_prefix="webhook:")

        with pytest.raises(UpstreamForwardError):
            await service.forward("abc12345", {"content": "hi"})

    @pytest.mark.asyncio
    async def test_timeout(self, registered_store, http_client, upstream):
        upstream.error = httpx.ReadTimeout("timed out")
        service = ForwardingService(registered_store, http_client, key_prefix="webhook:")

        with pytest.raises(UpstreamForwardError):
            await service.forward("abc12345", {"content": "hi"})

    @pytest.mark.asyncio
    async def test_single_attempt_on_failure(self, registered_store, http_client, upstream):
        upstream.status_code = 503
        service = ForwardingService(registered_store, http_client, key_prefix="webhook:")

        with pytest.raises(UpstreamForwardError):
            await service.forward("abc12345", {"content": "hi"})
        assert len(upstream.requests) == 1
