"""
Configuration Settings

This module defines application configuration using Pydantic Settings.
All configuration is loaded from environment variables or .env files.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Supports multiple environments (production, staging, dev)
- Defaults to a JSON file store for easy local development
- Switches to Redis in production (KV_URL) without code changes
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "settings", "EnvSettingsOptions", "StoreBackend"]

BASE_DIR = Path(__file__).resolve().parent.parent.parent


class EnvSettingsOptions(Enum):
    """Environment options for deployment."""
    production = "production"
    staging = "staging"
    development = "dev"


class StoreBackend(Enum):
    """Key-value store backends for proxy mappings."""
    redis = "redis"
    file = "file"
    memory = "memory"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_file=(".env", ".env.development.local"),
        case_sensitive=False,
        extra="ignore"
    )

    # Project Configuration
    ENV_SETTING: EnvSettingsOptions = Field(
        default=EnvSettingsOptions.development,
        description="Environment setting (production, staging, dev)"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Log level for the application loggers"
    )
    HOST: str = Field(default="0.0.0.0", description="Interface to bind the server to")
    PORT: int = Field(default=3000, description="Port to listen on")

    # Storage Configuration
    # Production uses Redis (KV_URL); everything else uses a local JSON file
    STORE_BACKEND: Optional[StoreBackend] = Field(
        default=None,
        description="Force a store backend (redis, file, memory). Derived from ENV_SETTING when unset"
    )
    KV_URL: Optional[str] = Field(
        default=None,
        description="Redis connection string, e.g. redis://localhost:6379/0"
    )
    LOCAL_DB_PATH: str = Field(
        default="local-db.json",
        description="Path of the JSON file used by the development store"
    )
    KEY_PREFIX: str = Field(
        default="webhook:",
        description="Namespace prefix for mapping records in the store"
    )

    # Proxy Configuration
    WEBHOOK_URL_PREFIX: str = Field(
        default="https://discord.com/api/webhooks/",
        description="Required prefix of every registered webhook URL"
    )
    PROXY_ID_LENGTH: int = Field(
        default=8,
        description="Number of characters in a generated proxy ID"
    )
    PROXY_ID_MAX_ATTEMPTS: int = Field(
        default=5,
        description="Candidate IDs tried when an ID is already taken (0 disables the check)"
    )
    FORWARD_TIMEOUT_SECONDS: float = Field(
        default=5.0,
        description="Timeout for relaying a payload to the webhook"
    )

    # Rate Limiting Configuration
    # Format: "count/period" as understood by the limits library
    CREATE_RATE_LIMIT: str = Field(default="20/hour")
    PROXY_RATE_LIMIT: str = Field(default="100/15 minutes")
    RATE_LIMIT_STORAGE_URI: Optional[str] = Field(
        default=None,
        description="Counter storage for rate limits (memory://, redis://...)"
    )
    RATE_LIMIT_ENABLED: bool = Field(default=True)
    TRUST_PROXY_HEADERS: bool = Field(
        default=True,
        description="Use X-Forwarded-For / X-Forwarded-Proto from the first proxy hop"
    )

    # Front-end
    STATIC_DIR: str = Field(
        default=str(BASE_DIR / "public"),
        description="Directory holding index.html and its assets"
    )

    @property
    def store_backend(self) -> StoreBackend:
        """Backend selected explicitly or by environment."""
        if self.STORE_BACKEND is not None:
            return self.STORE_BACKEND
        if self.ENV_SETTING is EnvSettingsOptions.production:
            return StoreBackend.redis
        return StoreBackend.file


settings = Settings()
