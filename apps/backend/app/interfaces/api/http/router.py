"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (prefix="/api").
  - Centralizar responses RFC7807 para OpenAPI.
  - Componer routers por recurso (auth/usuarios, formularios, trámites).

Patrones aplicados:
  - Composition over inheritance: router raíz compone sub-routers.
  - Factory: build_router() para testear composición sin side-effects.

Colaboradores:
  - crosscutting.error_responses.OPENAPI_ERROR_RESPONSES
  - routers.* (sub-routers por recurso)
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers import forms_router, submissions_router, users_router


def build_router() -> APIRouter:
    """Construye el router raíz /api."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(users_router)
    api_router.include_router(forms_router)
    api_router.include_router(submissions_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
