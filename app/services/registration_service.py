"""
Registration Service

This service handles the core business logic for registering webhooks:
- Validating the submitted Discord webhook URL
- Minting a proxy ID
- Persisting the mapping record
- Building the public proxy URL

Design Decisions:
- Stateless: everything lives in the injected KeyValueStore
- Collision check: a candidate ID already present in the store is
  redrawn, up to max_attempts times. With max_attempts=0 the check is
  skipped and a colliding ID silently overwrites the older record
- Exactly one store write per successful registration
"""

import logging
from typing import Callable, Optional

from app.core.exceptions import InvalidWebhookURLError, StorageReadError, StorageWriteError
from app.core.setting import settings
from app.core.validators import is_valid_webhook_url
from app.db.interface import KeyValueStore
from app.db.models import ProxyMapping, storage_key
from app.services.id_generator import generate_proxy_id

logger = logging.getLogger(__name__)

PROXY_PATH = "/api/proxy"


def build_proxy_url(base_url: str, proxy_id: str) -> str:
    """
    Public URL for a proxy ID.

    Args:
        base_url: "<scheme>://<host>" of the inbound request
        proxy_id: The proxy ID

    Returns:
        "<base_url>/api/proxy/<proxy_id>"
    """
    return f"{base_url.rstrip('/')}{PROXY_PATH}/{proxy_id}"


class RegistrationService:
    """
    Core business logic for registering webhook URLs.

    Separated from the API layer for testability.
    """

    def __init__(
        self,
        store: KeyValueStore,
        id_length: Optional[int] = None,
        max_attempts: Optional[int] = None,
        key_prefix: Optional[str] = None,
        id_factory: Callable[[int], str] = generate_proxy_id,
    ):
        """
        Initialize the registration service.

        Args:
            store: Key-value store holding mapping records
            id_length: Proxy ID length (default: settings.PROXY_ID_LENGTH)
            max_attempts: Candidate IDs to try before giving up
                (default: settings.PROXY_ID_MAX_ATTEMPTS, 0 disables the check)
            key_prefix: Store key namespace (default: settings.KEY_PREFIX)
            id_factory: Callable producing an ID of the given length
        """
        self.store = store
        self.id_length = id_length if id_length is not None else settings.PROXY_ID_LENGTH
        self.max_attempts = max_attempts if max_attempts is not None else settings.PROXY_ID_MAX_ATTEMPTS
        self.key_prefix = key_prefix if key_prefix is not None else settings.KEY_PREFIX
        self.id_factory = id_factory

    async def _is_taken(self, proxy_id: str) -> bool:
        key = storage_key(proxy_id, self.key_prefix)
        try:
            return await self.store.get(key) is not None
        except Exception as e:
            logger.error(f"[DB-READ-FAIL] Collision check failed for key: {key}", exc_info=True)
            raise StorageReadError(f"Failed to read key {key}", original_error=e) from e

    async def _allocate_proxy_id(self) -> str:
        if self.max_attempts <= 0:
            return self.id_factory(self.id_length)

        for _ in range(self.max_attempts):
            candidate = self.id_factory(self.id_length)
            if not await self._is_taken(candidate):
                return candidate
            logger.warning(f"Proxy ID collision on '{candidate}', drawing a new one")

        raise StorageWriteError(
            f"No free proxy ID after {self.max_attempts} attempts"
        )

    async def register(self, webhook_url: Optional[str], base_url: str) -> ProxyMapping:
        """
        Register a webhook URL and return its proxy mapping.

        Args:
            webhook_url: The real Discord webhook URL
            base_url: "<scheme>://<host>" used to build the proxy URL

        Returns:
            ProxyMapping with proxy_id, webhook_url and proxy_url populated

        Raises:
            InvalidWebhookURLError: If the URL is not a Discord webhook URL
            StorageReadError: If the collision check cannot read the store
            StorageWriteError: If the mapping cannot be written
        """
        if not is_valid_webhook_url(webhook_url):
            raise InvalidWebhookURLError(webhook_url)

        proxy_id = await self._allocate_proxy_id()
        key = storage_key(proxy_id, self.key_prefix)

        try:
            await self.store.set(key, webhook_url)
        except Exception as e:
            logger.error(f"[DB-WRITE-FAIL] Could not write key: {key}", exc_info=True)
            raise StorageWriteError(f"Failed to write key {key}", original_error=e) from e

        logger.info(f"[DB-WRITE-OK] Wrote key: {key}")

        return ProxyMapping(
            proxy_id=proxy_id,
            webhook_url=webhook_url,
            proxy_url=build_proxy_url(base_url, proxy_id),
        )
