"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (security headers, body limit, request context, CORS)
  - Mount the business router under the /api prefix
  - Expose health and readiness checks backed by a store ping

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - interfaces.api.http.router: usuarios / formularios / trámites endpoints
  - app.container: store + identity gateway singletons (warmed at startup)

Constraints:
  - CORS configurable via ALLOWED_ORIGINS env var (comma-separated)
  - Unknown routes answer 404 RFC7807 ("Ruta no encontrada")

Notes:
  - Middleware order matters: RequestContext → SecurityHeaders → BodyLimit → routes
  - /healthz and /readyz follow the Kubernetes health check convention
  - Settings are validated in the lifespan (production guard), not at import time
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..application.bootstrap_superadmin import ensure_bootstrap_superadmin
from ..container import get_document_store, get_identity_gateway, get_user_repository
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
)
from ..crosscutting.logger import logger
from ..crosscutting.middleware import BodyLimitMiddleware, RequestContextMiddleware
from ..crosscutting.security import SecurityHeadersMiddleware
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Warms collaborators and runs the bootstrap."""
    settings = get_settings()

    # Store + identity gateway are process-wide singletons.
    get_document_store()
    get_identity_gateway()

    try:
        await ensure_bootstrap_superadmin(settings, user_repo=get_user_repository())
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise

    logger.info(
        "Sisvantec API starting up",
        extra={
            "app_env": settings.app_env,
            "store_backend": settings.store_backend,
            "identity_backend": settings.identity_backend,
            "submission_delete_policy": settings.submission_delete_policy,
        },
    )

    yield

    logger.info("Sisvantec API shutting down")


app = FastAPI(
    title="Sisvantec API",
    version="0.1.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "auth", "description": "Login, perfil y gestión de usuarios"},
        {"name": "formularios", "description": "Formularios por municipio"},
        {"name": "tramites", "description": "Trámites ciudadanos y su revisión"},
    ],
)

# Middleware order (bottom = first to execute):
# 1. CORSMiddleware - handles preflight
# 2. RequestContextMiddleware - sets request_id
# 3. SecurityHeadersMiddleware - OWASP headers on every response
# 4. BodyLimitMiddleware - rejects oversized bodies early
app.add_middleware(BodyLimitMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestContextMiddleware)

_settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.get_allowed_origins_list(),
    allow_credentials=_settings.cors_allow_credentials,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
)

app.include_router(router, prefix="/api")

register_exception_handlers(app)


async def _route_not_found(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return await app_exception_handler(
            request,
            AppHTTPException(404, ErrorCode.NOT_FOUND, "Ruta no encontrada"),
        )
    return await http_exception_handler(request, exc)


app.add_exception_handler(StarletteHTTPException, _route_not_found)


async def _store_status() -> str:
    try:
        if await get_document_store().ping():
            return "connected"
    except Exception as e:
        logger.warning("Health check: store unavailable", extra={"error": str(e)})
    return "disconnected"


@app.get("/healthz")
async def healthz(request: Request):
    """
    Liveness + dependency check.

    Returns:
        ok: True if the document store answers
        store: "connected" or "disconnected"
        request_id: Correlation ID for this request
    """
    store_status = await _store_status()
    return {
        "ok": store_status == "connected",
        "store": store_status,
        "request_id": getattr(request.state, "request_id", None),
    }


@app.get("/readyz")
async def readyz(request: Request):
    """Readiness check: same store ping, minimal payload."""
    store_status = await _store_status()
    return {
        "ok": store_status == "connected",
        "store": store_status,
        "request_id": getattr(request.state, "request_id", None),
    }
