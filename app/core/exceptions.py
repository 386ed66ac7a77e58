"""
Custom Exceptions

This module defines custom exceptions for better error handling
and more specific error messages.

Every exception carries enough detail for operator logs. Endpoints map
them to short client messages; the detail never reaches the response.
"""

from typing import Optional


class WebhookProxyException(Exception):
    """Base exception for the webhook proxy service."""
    pass


class InvalidWebhookURLError(WebhookProxyException):
    """Raised when a submitted webhook URL fails validation."""

    def __init__(self, url: Optional[str], reason: str = "Invalid Discord webhook URL"):
        self.url = url
        self.reason = reason
        super().__init__(reason)


class InvalidPayloadError(WebhookProxyException):
    """Raised when a payload to relay is not valid JSON."""

    def __init__(self, reason: str = "Invalid JSON payload"):
        self.reason = reason
        super().__init__(reason)


class MissingProxyIdError(WebhookProxyException):
    """Raised when a forward request carries no proxy ID."""

    def __init__(self):
        super().__init__("Proxy ID is missing")


class ProxyNotFoundError(WebhookProxyException):
    """Raised when a proxy ID has no mapping in the store."""

    def __init__(self, proxy_id: str):
        self.proxy_id = proxy_id
        super().__init__(f"Proxy ID '{proxy_id}' not found")


class StorageError(WebhookProxyException):
    """Raised when the key-value store fails."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Storage error: {message}")


class StorageWriteError(StorageError):
    """Raised when a mapping record cannot be written."""


class StorageReadError(StorageError):
    """Raised when a mapping record cannot be read."""


class UpstreamForwardError(WebhookProxyException):
    """Raised when relaying a payload to the webhook fails."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        original_error: Exception = None
    ):
        self.status_code = status_code
        self.original_error = original_error
        super().__init__(f"Upstream forward failed: {message}")
