"""
Rate Limiting Configuration

This module provides rate limiting functionality for API endpoints.
Rate limiting prevents abuse and ensures fair usage.

Design Decisions:
- Uses slowapi for rate limiting (lightweight, FastAPI-compatible)
- Moving-window strategy so the ceilings hold over any rolling window
- IP-based limiting, honouring the first X-Forwarded-For hop
- Counters live in Redis in production so every worker shares them
"""

import logging
from typing import Optional

from fastapi import Request
from slowapi import Limiter

from app.core.setting import EnvSettingsOptions, Settings, settings

logger = logging.getLogger(__name__)


def get_client_ip(request: Request) -> str:
    """
    Extract client IP address from request.

    Handles proxies and load balancers by checking X-Forwarded-For header.

    Args:
        request: FastAPI Request object

    Returns:
        IP address as string
    """
    if settings.TRUST_PROXY_HEADERS:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            # X-Forwarded-For can contain multiple IPs, take the first one
            return forwarded_for.split(",")[0].strip()

    return request.client.host if request.client else "unknown"


def resolve_storage_uri(config: Settings) -> str:
    """
    Pick the counter storage for the limiter.

    Counters are kept apart from mapping records: an explicit
    RATE_LIMIT_STORAGE_URI wins, production falls back to KV_URL,
    and everything else counts in process memory.
    """
    if config.RATE_LIMIT_STORAGE_URI:
        return config.RATE_LIMIT_STORAGE_URI
    if config.ENV_SETTING is EnvSettingsOptions.production and config.KV_URL:
        return config.KV_URL
    return "memory://"


def create_limiter(config: Optional[Settings] = None) -> Limiter:
    config = config or settings
    storage_uri = resolve_storage_uri(config)
    logger.info(f"Rate limit counters stored in {storage_uri.split('://')[0]}")
    return Limiter(
        key_func=get_client_ip,
        storage_uri=storage_uri,
        strategy="moving-window",
        enabled=config.RATE_LIMIT_ENABLED,
    )


limiter = create_limiter()

# Rate limit configurations per endpoint
RATE_LIMITS = {
    "create": settings.CREATE_RATE_LIMIT,  # 20 per hour per IP
    "proxy": settings.PROXY_RATE_LIMIT,  # 100 per 15 minutes per IP
}
