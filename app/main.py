"""
FastAPI Application Entry Point

This module initializes the FastAPI application and configures:
- API routes
- Middleware (logging, CORS)
- Error rendering ({"error": "..."} bodies)
- Store and HTTP client lifecycle
- Front-end serving

Design Decisions:
- The store backend is chosen once at startup and kept on app.state;
  endpoints receive it through dependencies
- Static front-end routes are registered last so /api and /health win
"""

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import endpoints
from app.core.rate_limit import limiter
from app.core.setting import settings
from app.db.session import build_http_client, build_store
from app.middleware.logging import add_logging_middleware

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Discord Webhook Proxy",
    description="Hides Discord webhook URLs behind short-lived proxy links",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

add_logging_middleware(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render HTTP errors as {"error": detail}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are client errors: 400, not 422."""
    logger.info(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body."})


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns:
        Health status of the service
    """
    return {"status": "healthy"}


app.include_router(endpoints.router, tags=["Webhook Proxy"])


@app.get("/{full_path:path}", include_in_schema=False)
async def serve_frontend(full_path: str) -> FileResponse:
    """
    Serve front-end assets, falling back to index.html for any other path.
    """
    static_dir = Path(settings.STATIC_DIR).resolve()
    if full_path:
        candidate = (static_dir / full_path).resolve()
        if static_dir in candidate.parents and candidate.is_file():
            return FileResponse(candidate)
    return FileResponse(static_dir / "index.html")


@app.on_event("startup")
async def startup_event():
    """Open the store and the outbound HTTP client."""
    logger.info(f"Starting in {settings.ENV_SETTING.value} mode")
    app.state.store = build_store()
    app.state.http_client = build_http_client()


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    http_client = getattr(app.state, "http_client", None)
    if http_client is not None:
        await http_client.aclose()

    store = getattr(app.state, "store", None)
    if store is not None:
        await store.close()
