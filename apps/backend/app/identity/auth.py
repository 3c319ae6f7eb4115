"""
===============================================================================
TARJETA CRC — identity/auth.py
===============================================================================

Módulo:
    Adapter FastAPI de autenticación (Bearer token -> AuthorizationProfile)

Responsabilidades:
    - Exponer dependencias FastAPI:
        - require_profile: autenticación obligatoria.
        - optional_profile: autenticación opcional (anónimo si falla).
        - require_login_user: credential exchange (login).
    - Traducir AuthenticationError a RFC7807:
        - sin token / expirado / inválido -> 401 (+ WWW-Authenticate)
        - cuenta inactiva                 -> 403 ACCOUNT_INACTIVE
        - cuenta inexistente              -> 404 NOT_FOUND

Colaboradores:
    - identity.gateway.IdentityGateway (lógica pura, sin FastAPI)
    - app.container.get_identity_gateway
    - crosscutting.error_responses

Notas:
    - Nunca se loguea el token.
    - El perfil resuelto viaja explícito hacia los casos de uso.
===============================================================================
"""

from __future__ import annotations

from fastapi import Header

from ..container import get_identity_gateway
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    account_inactive,
    unauthorized,
)
from .gateway import AuthenticationError, AuthFailure
from .users import AuthorizationProfile, User


def to_http_error(exc: AuthenticationError) -> AppHTTPException:
    """Mapea AuthenticationError -> AppHTTPException."""
    if exc.kind == AuthFailure.TOKEN_EXPIRED:
        return unauthorized(exc.message, code=ErrorCode.TOKEN_EXPIRED)
    if exc.kind == AuthFailure.TOKEN_INVALID:
        return unauthorized(exc.message, code=ErrorCode.TOKEN_INVALID)
    if exc.kind == AuthFailure.ACCOUNT_INACTIVE:
        return account_inactive(exc.message)
    if exc.kind == AuthFailure.ACCOUNT_NOT_FOUND:
        return AppHTTPException(404, ErrorCode.NOT_FOUND, exc.message)
    return unauthorized(exc.message)


async def require_profile(
    authorization: str | None = Header(None, alias="Authorization"),
) -> AuthorizationProfile:
    try:
        return await get_identity_gateway().authenticate(authorization)
    except AuthenticationError as exc:
        raise to_http_error(exc) from exc


async def optional_profile(
    authorization: str | None = Header(None, alias="Authorization"),
) -> AuthorizationProfile:
    return await get_identity_gateway().authenticate_optional(authorization)


async def require_login_user(
    authorization: str | None = Header(None, alias="Authorization"),
) -> User:
    """Login: autentica y registra el último acceso."""
    try:
        return await get_identity_gateway().exchange(authorization)
    except AuthenticationError as exc:
        raise to_http_error(exc) from exc


__all__ = [
    "optional_profile",
    "require_login_user",
    "require_profile",
    "to_http_error",
]
