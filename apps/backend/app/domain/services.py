"""
===============================================================================
TARJETA CRC — domain/services.py
===============================================================================

Módulo:
    Puertos de Servicios Externos (Protocols)

Responsabilidades:
    - Definir el contrato del identity provider (verificar tokens, crear y
      deshabilitar cuentas).
    - Definir los fallos tipados del contrato (token expirado / inválido,
      email ya registrado).
    - Mantener el dominio independiente del SDK (Firebase Admin / PyJWT).

Colaboradores:
    - infrastructure/services/*: FirebaseIdentityProvider, JwtIdentityProvider.
    - identity/gateway.py, application/usecases/users: consumen este puerto.

Reglas:
    - SOLO interfaces y errores de contrato: nada de implementación.
    - Fallas de infraestructura del proveedor se reportan como
      crosscutting.exceptions.IdentityProviderError (Internal).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class TokenExpiredError(Exception):
    """El token fue emitido correctamente pero expiró."""


class TokenInvalidError(Exception):
    """Token malformado, con firma inválida, revocado o de cuenta deshabilitada."""


class AccountExistsError(Exception):
    """Ya existe una cuenta con ese email en el identity provider."""


@dataclass(frozen=True, slots=True)
class VerifiedIdentity:
    """Resultado de verificar un token: subject estable + email (si viene)."""

    subject_id: str
    email: str | None = None


class IdentityProvider(Protocol):
    """Contrato del identity provider."""

    async def verify_token(self, token: str) -> VerifiedIdentity:
        """Verifica el token. Lanza TokenExpiredError / TokenInvalidError."""
        ...

    async def create_account(
        self, *, email: str, password: str, display_name: str
    ) -> str:
        """Crea la cuenta y devuelve su subject_id. Lanza AccountExistsError."""
        ...

    async def disable_account(self, subject_id: str) -> None:
        """Deshabilita el inicio de sesión de la cuenta."""
        ...
