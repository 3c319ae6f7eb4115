"""
===============================================================================
TARJETA CRC — app/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones de colaboradores (store / identity provider) a
    respuestas HTTP RFC7807 (500, mensaje original preservado).
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos en errores no controlados en producción.

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, handlers
  - crosscutting.exceptions: SisvantecError, StoreError, IdentityProviderError
  - crosscutting.config.get_settings (nivel de detalle)
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    request_validation_handler,
)
from ..crosscutting.exceptions import (
    IdentityProviderError,
    SisvantecError,
    StoreError,
)
from ..crosscutting.logger import logger


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


async def _handle_collaborator_error(
    request: Request, *, exc: SisvantecError, code: ErrorCode
) -> JSONResponse:
    request_id = _request_id_from(request)

    logger.error(
        "Error de colaborador",
        exc_info=exc,
        extra={
            "code": code.value,
            "error_id": exc.error_id,
            "error_message": exc.message,
            "request_id": request_id,
        },
    )

    app_exc = AppHTTPException(
        status_code=500,
        code=code,
        detail=exc.message,
        errors=[{"error_id": exc.error_id}],
    )
    return await app_exception_handler(request, app_exc)


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    return await _handle_collaborator_error(
        request, exc=exc, code=ErrorCode.STORE_ERROR
    )


async def identity_provider_error_handler(
    request: Request, exc: IdentityProviderError
) -> JSONResponse:
    return await _handle_collaborator_error(
        request, exc=exc, code=ErrorCode.IDENTITY_PROVIDER_ERROR
    )


async def sisvantec_error_handler(
    request: Request, exc: SisvantecError
) -> JSONResponse:
    return await _handle_collaborator_error(
        request, exc=exc, code=ErrorCode.INTERNAL_ERROR
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica en producción.
    """
    request_id = _request_id_from(request)

    logger.error(
        "Excepción no controlada",
        exc_info=True,
        extra={"request_id": request_id, "error": str(exc)},
    )

    detail = str(exc) if not get_settings().is_production() else "Error interno."
    return await app_exception_handler(
        request,
        AppHTTPException(
            status_code=500, code=ErrorCode.INTERNAL_ERROR, detail=detail
        ),
    )


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - Subclases antes que la base (StoreError antes que SisvantecError).
      - Exception genérica se registra al final como fallback.
    """
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(IdentityProviderError, identity_provider_error_handler)
    app.add_exception_handler(SisvantecError, sisvantec_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
