"""
===============================================================================
TARJETA CRC — infrastructure/services/jwt_identity.py
===============================================================================

Class:
    JwtIdentityProvider

Responsabilidades:
    - Implementar domain.services.IdentityProvider con JWT HS256 (PyJWT).
    - Emitir access tokens (sub, email, iat, exp, typ) para desarrollo local
      y tests.
    - Mantener un registro in-process de cuentas (email -> subject) y de
      cuentas deshabilitadas.

Colaboradores:
    - crosscutting.config.Settings (jwt_secret, jwt_access_ttl_minutes)
    - container.py (IDENTITY_BACKEND=jwt)

Notas:
    - Cuenta deshabilitada => su token falla como inválido.
    - No reemplaza a Firebase Auth en producción (Settings lo rechaza).
    - No loguear tokens ni secretos.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Dict, Set
from uuid import uuid4

import jwt

from ...domain.services import (
    AccountExistsError,
    TokenExpiredError,
    TokenInvalidError,
    VerifiedIdentity,
)

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"
CLAIM_TYP: str = "typ"

TOKEN_TYPE_ACCESS: str = "access"


class JwtIdentityProvider:
    """Identity provider local basado en JWT firmados con secreto compartido."""

    def __init__(self, secret: str, *, access_ttl_minutes: int = 60) -> None:
        if not secret:
            raise ValueError("jwt secret requerido")
        self._secret = secret
        self._access_ttl = timedelta(minutes=access_ttl_minutes)
        self._lock = Lock()
        self._accounts: Dict[str, str] = {}
        self._disabled: Set[str] = set()

    # ------------------------------------------------------------------
    # Emisión (solo este adapter; Firebase emite del lado del cliente)
    # ------------------------------------------------------------------
    def issue_token(
        self,
        subject_id: str,
        *,
        email: str | None = None,
        ttl: timedelta | None = None,
    ) -> str:
        """Firma un access token. ttl negativo => token ya expirado."""
        now = datetime.now(timezone.utc)
        payload: dict[str, object] = {
            CLAIM_SUB: subject_id,
            CLAIM_IAT: int(now.timestamp()),
            CLAIM_EXP: int((now + (ttl if ttl is not None else self._access_ttl)).timestamp()),
            CLAIM_TYP: TOKEN_TYPE_ACCESS,
        }
        if email:
            payload[CLAIM_EMAIL] = email
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    # ------------------------------------------------------------------
    # IdentityProvider
    # ------------------------------------------------------------------
    async def verify_token(self, token: str) -> VerifiedIdentity:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": [CLAIM_SUB, CLAIM_EXP]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError("Token expirado") from exc
        except jwt.InvalidTokenError as exc:
            raise TokenInvalidError("Token inválido") from exc

        subject_id = payload.get(CLAIM_SUB)
        token_type = payload.get(CLAIM_TYP)
        if not subject_id or not isinstance(subject_id, str):
            raise TokenInvalidError("Token inválido")
        if token_type is not None and token_type != TOKEN_TYPE_ACCESS:
            raise TokenInvalidError("Tipo de token inválido")

        with self._lock:
            if subject_id in self._disabled:
                raise TokenInvalidError("Cuenta deshabilitada")

        email = payload.get(CLAIM_EMAIL)
        return VerifiedIdentity(subject_id=subject_id, email=email if isinstance(email, str) else None)

    async def create_account(
        self, *, email: str, password: str, display_name: str
    ) -> str:
        normalized = email.strip().lower()
        with self._lock:
            if normalized in self._accounts:
                raise AccountExistsError(email)
            subject_id = uuid4().hex
            self._accounts[normalized] = subject_id
        return subject_id

    async def disable_account(self, subject_id: str) -> None:
        with self._lock:
            self._disabled.add(subject_id)
