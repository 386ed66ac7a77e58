"""
Forwarding Service

This service relays inbound payloads to the webhook behind a proxy ID.

Design Decisions:
- Lookup failures (missing ID, unknown ID) are raised before any
  outbound call is attempted
- One relay attempt per request, bounded by a timeout, never retried
- Upstream errors are logged here and reported as UpstreamForwardError;
  Discord's response body never reaches the caller
"""

import logging
from typing import Any, Optional

import httpx

from app.core.exceptions import (
    MissingProxyIdError,
    ProxyNotFoundError,
    StorageReadError,
    UpstreamForwardError,
)
from app.core.setting import settings
from app.core.validators import sanitize_proxy_id
from app.db.interface import KeyValueStore
from app.db.models import ProxyMapping, storage_key

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class ForwardingService:
    """
    Service for relaying payloads through proxy IDs.

    The HTTP client is injected so one connection pool is shared across
    requests and tests can swap in a mock transport.
    """

    def __init__(
        self,
        store: KeyValueStore,
        http_client: httpx.AsyncClient,
        timeout: Optional[float] = None,
        key_prefix: Optional[str] = None,
    ):
        """
        Args:
            store: Key-value store holding mapping records
            http_client: Client used for the outbound POST
            timeout: Relay timeout in seconds (default: settings.FORWARD_TIMEOUT_SECONDS)
            key_prefix: Store key namespace (default: settings.KEY_PREFIX)
        """
        self.store = store
        self.http_client = http_client
        self.timeout = timeout if timeout is not None else settings.FORWARD_TIMEOUT_SECONDS
        self.key_prefix = key_prefix if key_prefix is not None else settings.KEY_PREFIX

    async def resolve(self, proxy_id: Optional[str]) -> ProxyMapping:
        """
        Look up the mapping record for a proxy ID.

        Raises:
            MissingProxyIdError: If proxy_id is empty
            ProxyNotFoundError: If no record exists
            StorageReadError: If the store cannot be read
        """
        sanitized_id = sanitize_proxy_id(proxy_id)
        if not sanitized_id:
            raise MissingProxyIdError()

        key = storage_key(sanitized_id, self.key_prefix)
        try:
            webhook_url = await self.store.get(key)
        except Exception as e:
            logger.error(f"[DB-READ-FAIL] Could not read key: {key}", exc_info=True)
            raise StorageReadError(f"Failed to read key {key}", original_error=e) from e

        if not webhook_url:
            logger.info(f"[DB-READ-FAIL] Key not found: {key}")
            raise ProxyNotFoundError(sanitized_id)

        logger.info(f"[DB-READ-OK] Retrieved key: {key}")
        return ProxyMapping(proxy_id=sanitized_id, webhook_url=webhook_url)

    async def relay(self, mapping: ProxyMapping, payload: Any) -> None:
        """
        POST payload as JSON to the mapped webhook.

        Raises:
            UpstreamForwardError: On network error, timeout or non-2xx status
        """
        try:
            response = await self.http_client.post(
                mapping.webhook_url,
                json=payload,
                headers=JSON_HEADERS,
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            logger.error(f"[PROXY-FAIL] Timed out relaying for proxy '{mapping.proxy_id}'")
            raise UpstreamForwardError("timeout", original_error=e) from e
        except httpx.HTTPError as e:
            logger.error(
                f"[PROXY-FAIL] Network error relaying for proxy '{mapping.proxy_id}': {e!r}"
            )
            raise UpstreamForwardError("network error", original_error=e) from e

        if not response.is_success:
            logger.error(
                f"[PROXY-FAIL] Upstream returned {response.status_code} "
                f"for proxy '{mapping.proxy_id}': {response.text[:500]}"
            )
            raise UpstreamForwardError(
                f"upstream status {response.status_code}",
                status_code=response.status_code,
            )

    async def forward(self, proxy_id: Optional[str], payload: Any) -> None:
        """
        Resolve proxy_id and relay payload to its webhook.

        Raises:
            MissingProxyIdError, ProxyNotFoundError, StorageReadError,
            UpstreamForwardError
        """
        mapping = await self.resolve(proxy_id)
        await self.relay(mapping, payload)
        logger.info(f"Relayed payload for proxy '{mapping.proxy_id}'")
