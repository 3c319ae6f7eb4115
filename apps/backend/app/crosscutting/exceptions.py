# apps/backend/app/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores de colaboradores)
===============================================================================

Objetivo
--------
Las fallas del document store y del identity provider NO son decisiones de
negocio: se propagan como excepciones tipadas (nunca se tragan) y la capa
HTTP las traduce a 500 con:
- error_code estable
- error_id para correlación con logs
- message original (diagnóstico)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  SisvantecError + subclases

Responsabilidades:
  - Estandarizar errores internos que luego se mapean a HTTP
  - Generar error_id para rastreo

Colaboradores:
  - infrastructure/store/* y infrastructure/services/* (las lanzan)
  - api/exception_handlers.py (las mapea a AppHTTPException)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class SisvantecError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      SisvantecError

    Responsabilidades:
      - Base para errores internos del sistema
      - Proveer error_code + error_id + message

    Colaboradores:
      - api/exception_handlers.py
    ----------------------------------------------------------------------------
    """

    error_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class StoreError(SisvantecError):
    """Falla del document store (red, permisos, cuota, timeout)."""

    error_code: str = "STORE_ERROR"


class IdentityProviderError(SisvantecError):
    """Falla del identity provider (no incluye tokens inválidos/expirados)."""

    error_code: str = "IDENTITY_PROVIDER_ERROR"
