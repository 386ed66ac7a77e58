"""
Input Validators and Sanitizers

This module provides validation and sanitization functions for user inputs.

Security Considerations:
- Only Discord webhook URLs may be registered (prefix match)
"""

from typing import Any, Optional

from app.core.setting import settings


def is_valid_webhook_url(url: Any, prefix: Optional[str] = None) -> bool:
    """
    Check that a value is a Discord webhook URL.

    Args:
        url: The submitted value (anything decoded from the request body)
        prefix: Required prefix (default: settings.WEBHOOK_URL_PREFIX)

    Returns:
        True if the value is a non-empty string starting with the prefix
    """
    if not url or not isinstance(url, str):
        return False

    return url.startswith(prefix or settings.WEBHOOK_URL_PREFIX)


def sanitize_proxy_id(proxy_id: Optional[str]) -> Optional[str]:
    """
    Check that a proxy ID taken from the request path is present.

    Whitespace only decides whether the ID is missing; a present ID is
    returned verbatim so the lookup uses the exact path segment.

    Args:
        proxy_id: Raw path segment

    Returns:
        The ID unchanged, or None if it is empty or whitespace
    """
    if not proxy_id or not isinstance(proxy_id, str):
        return None

    if not proxy_id.strip():
        return None

    return proxy_id
