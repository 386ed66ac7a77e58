"""
API Request and Response Schemas

This module defines all Pydantic models for API requests and responses.
Field names follow the JSON contract of the front-end (camelCase).

The webhook URL is kept a plain optional string here: the prefix rule
lives in the registration service so a bad URL yields the same 400 no
matter how it arrives.
"""

from typing import Optional

from pydantic import BaseModel, Field


class CreateProxyRequest(BaseModel):
    """Request model for proxy creation endpoint."""
    webhookUrl: Optional[str] = Field(default=None, description="The Discord webhook URL to protect")


class CreateProxyResponse(BaseModel):
    """Response model for proxy creation endpoint."""
    proxyUrl: str = Field(..., description="Public URL that relays to the webhook")


class ErrorResponse(BaseModel):
    """Body of every error response."""
    error: str
