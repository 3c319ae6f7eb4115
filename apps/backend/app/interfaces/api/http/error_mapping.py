"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCaseError -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir UseCaseError (code + message + resource) a AppHTTPException.
  - Centralizar el mapeo para los tres routers (usuarios/formularios/trámites).

Reglas:
  - FORBIDDEN -> 403, NOT_FOUND -> 404, VALIDATION_ERROR -> 400,
    CONFLICT -> 409, UNAVAILABLE -> 409 FORM_UNAVAILABLE.
  - Las fallas de colaboradores (StoreError / IdentityProviderError) NO pasan
    por acá: las resuelve api/exception_handlers.py.

Colaboradores:
  - application.usecases.errors (ErrorCode, UseCaseError)
  - crosscutting.error_responses (factories)
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn

from app.application.usecases import ErrorCode, UseCaseError
from app.crosscutting.error_responses import (
    conflict,
    forbidden,
    form_unavailable,
    internal_error,
    not_found,
    validation_error,
)


def raise_use_case_error(error: UseCaseError, identifier: str | None = None) -> NoReturn:
    """
    Traduce UseCaseError -> HTTP.

    identifier se usa en el detalle de NOT_FOUND ("Formulario 'x' no encontrado").
    """
    if error.code == ErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    if error.code == ErrorCode.NOT_FOUND:
        raise not_found(error.resource or "Recurso", identifier or "-")
    if error.code == ErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == ErrorCode.CONFLICT:
        raise conflict(error.message)
    if error.code == ErrorCode.UNAVAILABLE:
        raise form_unavailable(error.message)

    raise internal_error(error.message)


__all__ = ["raise_use_case_error"]
