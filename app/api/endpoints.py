"""
FastAPI Endpoints for the Webhook Proxy Service

This module defines all REST API endpoints with minimal logic.
Endpoints only handle:
- Request parsing
- Rate limiting
- Error handling and HTTP responses
- Delegating to service layer

Error responses carry a short fixed message. Details of storage and
upstream failures are logged by the services and never returned.
"""

import json
from typing import Any

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from app.api.schemas import CreateProxyRequest, CreateProxyResponse, ErrorResponse
from app.core.exceptions import (
    InvalidPayloadError,
    InvalidWebhookURLError,
    MissingProxyIdError,
    ProxyNotFoundError,
    StorageError,
    StorageReadError,
    UpstreamForwardError,
)
from app.core.rate_limit import RATE_LIMITS, limiter
from app.core.setting import settings
from app.db.interface import KeyValueStore
from app.db.session import get_http_client, get_store
from app.services.forwarding_service import ForwardingService
from app.services.registration_service import RegistrationService

router = APIRouter(prefix="/api")

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_base_url(request: Request) -> str:
    """
    Build "<scheme>://<host>" as seen by the client.

    Behind a proxy the scheme comes from X-Forwarded-Proto (first hop);
    the host is taken from the Host header.

    Args:
        request: FastAPI Request object

    Returns:
        Base URL without trailing slash
    """
    scheme = request.url.scheme
    if settings.TRUST_PROXY_HEADERS:
        forwarded_proto = request.headers.get("X-Forwarded-Proto")
        if forwarded_proto:
            scheme = forwarded_proto.split(",")[0].strip()

    host = request.headers.get("host") or request.url.netloc
    return f"{scheme}://{host}"


def _reject_constant(token: str) -> Any:
    # NaN and Infinity are not JSON and cannot be re-encoded for the relay
    raise InvalidPayloadError(f"Unsupported JSON constant: {token}")


async def read_json_payload(request: Request) -> Any:
    """
    Decode the request body as JSON.

    An empty body relays as an empty object.

    Raises:
        InvalidPayloadError: If the body is not valid JSON
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError as e:
        raise InvalidPayloadError() from e


@router.post(
    "/create",
    response_model=CreateProxyResponse,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
    summary="Create a proxy link",
    description="Stores a Discord webhook URL and returns a proxy URL that relays to it"
)
@limiter.limit(RATE_LIMITS["create"])
async def create_proxy(
    request: Request,  # Required for rate limiting (slowapi expects parameter named 'request')
    body: CreateProxyRequest,
    store: KeyValueStore = Depends(get_store)
) -> CreateProxyResponse:
    """
    Register a webhook URL and return its proxy URL.

    Raises:
        HTTPException 400: If the URL is not a Discord webhook URL
        HTTPException 429: If rate limit exceeded
        HTTPException 500: If the mapping cannot be stored
    """
    registration_service = RegistrationService(store)

    try:
        mapping = await registration_service.register(body.webhookUrl, get_base_url(request))
    except InvalidWebhookURLError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid Discord webhook URL provided."
        )
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create proxy link."
        )

    return CreateProxyResponse(proxyUrl=mapping.proxy_url)


async def _forward(
    proxy_id: str,
    request: Request,
    store: KeyValueStore,
    http_client: httpx.AsyncClient
) -> Response:
    forwarding_service = ForwardingService(store, http_client)

    try:
        payload = await read_json_payload(request)
        await forwarding_service.forward(proxy_id, payload)
    except MissingProxyIdError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Proxy ID is missing."
        )
    except InvalidPayloadError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid JSON payload."
        )
    except ProxyNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Proxy link not found or expired."
        )
    except StorageReadError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not read proxy link."
        )
    except UpstreamForwardError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to forward request to Discord."
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/proxy/{proxy_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES,
    summary="Relay a payload",
    description="Forwards the JSON body to the webhook registered under proxy_id"
)
@limiter.shared_limit(RATE_LIMITS["proxy"], scope="proxy")
async def forward_payload(
    proxy_id: str,
    request: Request,
    store: KeyValueStore = Depends(get_store),
    http_client: httpx.AsyncClient = Depends(get_http_client)
) -> Response:
    """
    Relay the request body to the webhook behind proxy_id.

    Returns:
        Empty 204 response once the webhook accepted the payload

    Raises:
        HTTPException 400: If the body is not JSON
        HTTPException 404: If proxy_id is unknown
        HTTPException 429: If rate limit exceeded
        HTTPException 500: If the relay or the lookup fails
    """
    return await _forward(proxy_id, request, store, http_client)


@router.post("/proxy", include_in_schema=False)
@router.post("/proxy/", include_in_schema=False)
@limiter.shared_limit(RATE_LIMITS["proxy"], scope="proxy")
async def forward_without_id(
    request: Request,
    store: KeyValueStore = Depends(get_store),
    http_client: httpx.AsyncClient = Depends(get_http_client)
) -> Response:
    """Proxy path without an ID: always 400."""
    return await _forward("", request, store, http_client)
