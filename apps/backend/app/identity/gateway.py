"""
===============================================================================
TARJETA CRC — identity/gateway.py
===============================================================================

Módulo:
    Identity Gateway (credencial -> subject verificado -> AuthorizationProfile)

Responsabilidades:
    - Extraer el token de `Authorization: Bearer <token>`.
    - Verificar el token contra el identity provider.
    - Cargar la cuenta (colección `usuarios`) y rechazar cuentas inexistentes
      o inactivas.
    - Ofrecer autenticación opcional (endpoints públicos): nunca falla por
      token/cuenta, devuelve ANONYMOUS.
    - Credential exchange (login): autenticar + registrar último acceso.

Colaboradores:
    - domain.services.IdentityProvider (Firebase / JWT)
    - domain.repositories.UserRepository
    - identity.users: AuthorizationProfile, ANONYMOUS, User
    - identity.auth: adapta AuthenticationError a HTTP (401/403/404)

Reglas:
    - Sin FastAPI: el gateway es testeable con fakes.
    - Fallas del store / IdP (StoreError, IdentityProviderError) se propagan
      siempre, también en authenticate_optional.
    - El único error tragado es la escritura de ultimoAcceso en exchange().
===============================================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from enum import Enum
from typing import Callable

from ..crosscutting.exceptions import StoreError
from ..crosscutting.logger import logger
from ..domain.repositories import RecordNotFoundError, UserRepository
from ..domain.services import IdentityProvider, TokenExpiredError, TokenInvalidError
from .users import ANONYMOUS, AuthorizationProfile, User


class AuthFailure(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"
    ACCOUNT_INACTIVE = "account_inactive"
    ACCOUNT_NOT_FOUND = "account_not_found"


_MESSAGES = {
    AuthFailure.UNAUTHENTICATED: "Token de autenticación no proporcionado",
    AuthFailure.TOKEN_EXPIRED: "Token expirado. Por favor, inicie sesión nuevamente",
    AuthFailure.TOKEN_INVALID: "Token inválido",
    AuthFailure.ACCOUNT_INACTIVE: "Usuario inactivo. Contacte al administrador",
    AuthFailure.ACCOUNT_NOT_FOUND: "Usuario no encontrado",
}


class AuthenticationError(Exception):
    """Fallo de autenticación tipado (el adapter HTTP decide el status)."""

    def __init__(self, kind: AuthFailure, message: str | None = None):
        self.kind = kind
        self.message = message or _MESSAGES[kind]
        super().__init__(self.message)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>` (scheme case-insensitive)."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IdentityGateway:
    def __init__(
        self,
        identity_provider: IdentityProvider,
        user_repository: UserRepository,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._identity_provider = identity_provider
        self._users = user_repository
        self._clock = clock

    async def _resolve_user(self, authorization: str | None) -> User:
        token = extract_bearer_token(authorization)
        if token is None:
            raise AuthenticationError(AuthFailure.UNAUTHENTICATED)

        try:
            identity = await self._identity_provider.verify_token(token)
        except TokenExpiredError as exc:
            raise AuthenticationError(AuthFailure.TOKEN_EXPIRED) from exc
        except TokenInvalidError as exc:
            raise AuthenticationError(AuthFailure.TOKEN_INVALID) from exc

        user = await self._users.get_user(identity.subject_id)
        if user is None:
            raise AuthenticationError(AuthFailure.ACCOUNT_NOT_FOUND)
        if not user.active:
            raise AuthenticationError(AuthFailure.ACCOUNT_INACTIVE)
        return user

    async def authenticate(self, authorization: str | None) -> AuthorizationProfile:
        """Autenticación obligatoria. Lanza AuthenticationError."""
        user = await self._resolve_user(authorization)
        return AuthorizationProfile.from_user(user)

    async def authenticate_optional(
        self, authorization: str | None
    ) -> AuthorizationProfile:
        """Autenticación opcional: cualquier fallo de token/cuenta => ANONYMOUS."""
        if not authorization:
            return ANONYMOUS
        try:
            return await self.authenticate(authorization)
        except AuthenticationError as exc:
            logger.info(
                "Auth opcional: se continúa como anónimo",
                extra={"auth_failure": exc.kind.value},
            )
            return ANONYMOUS

    async def exchange(self, authorization: str | None) -> User:
        """
        Login: autentica y registra ultimoAcceso (best-effort).

        Devuelve el usuario con last_access_at actualizado (si se pudo
        escribir) para la respuesta del endpoint.
        """
        user = await self._resolve_user(authorization)
        now = self._clock()
        try:
            await self._users.record_last_access(user.subject_id, now)
        except (StoreError, RecordNotFoundError) as exc:
            logger.warning(
                "No se pudo registrar el último acceso",
                extra={"subject_id": user.subject_id, "error": str(exc)},
            )
            return user

        return replace(user, last_access_at=now)
