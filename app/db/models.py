"""
Mapping Record Model

A mapping record ties a public proxy ID to the real webhook URL.

Storage layout:
- key: "<KEY_PREFIX><proxy_id>" (e.g. "webhook:k3v9x0qa"), namespaced so the
  records can share a store with unrelated keys
- value: the webhook URL, verbatim

Records are written once at registration and only read afterwards.
"""

from dataclasses import dataclass, field
from typing import Optional

from app.core.setting import settings


def storage_key(proxy_id: str, prefix: Optional[str] = None) -> str:
    """Namespaced store key for a proxy ID."""
    return f"{prefix if prefix is not None else settings.KEY_PREFIX}{proxy_id}"


@dataclass(frozen=True)
class ProxyMapping:
    """
    A stored proxy ID → webhook URL association.

    Fields:
    - proxy_id: opaque public token
    - webhook_url: real Discord webhook URL (secret)
    - proxy_url: public URL handed back to the client, when known
    """
    proxy_id: str
    # embeds the webhook token; kept out of reprs and logs
    webhook_url: str = field(repr=False)
    proxy_url: Optional[str] = None