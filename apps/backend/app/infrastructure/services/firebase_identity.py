"""
===============================================================================
TARJETA CRC — infrastructure/services/firebase_identity.py
===============================================================================

Class:
    FirebaseIdentityProvider

Responsabilidades:
    - Implementar domain.services.IdentityProvider sobre Firebase Auth
      (firebase-admin).
    - Traducir excepciones del SDK a fallos del contrato:
        ExpiredIdTokenError              -> TokenExpiredError
        InvalidIdTokenError / ValueError -> TokenInvalidError
        EmailAlreadyExistsError          -> AccountExistsError
        otra FirebaseError               -> IdentityProviderError (Internal)

Colaboradores:
    - infrastructure.firebase.client.get_firebase_app
    - crosscutting.exceptions.IdentityProviderError

Notas:
    - El SDK de firebase-admin es bloqueante: cada llamada corre en un
      worker thread (asyncio.to_thread) para no frenar el event loop.
    - No loguear tokens.
===============================================================================
"""

from __future__ import annotations

import asyncio

import firebase_admin
from firebase_admin import auth
from firebase_admin.exceptions import FirebaseError

from ...crosscutting.exceptions import IdentityProviderError
from ...crosscutting.logger import logger
from ...domain.services import (
    AccountExistsError,
    TokenExpiredError,
    TokenInvalidError,
    VerifiedIdentity,
)


class FirebaseIdentityProvider:
    """Adapter de Firebase Auth."""

    def __init__(self, app: firebase_admin.App) -> None:
        self._app = app

    async def verify_token(self, token: str) -> VerifiedIdentity:
        try:
            claims = await asyncio.to_thread(auth.verify_id_token, token, self._app)
        except auth.ExpiredIdTokenError as exc:
            raise TokenExpiredError("Token expirado") from exc
        except (
            auth.InvalidIdTokenError,
            auth.UserDisabledError,
            ValueError,
        ) as exc:
            # RevokedIdTokenError es subclase de InvalidIdTokenError.
            raise TokenInvalidError("Token inválido") from exc
        except (auth.CertificateFetchError, FirebaseError) as exc:
            logger.error(
                "Firebase verify_id_token falló", extra={"error": str(exc)}
            )
            raise IdentityProviderError(
                "No se pudo verificar el token", original_error=exc
            ) from exc

        subject_id = claims.get("uid") or claims.get("sub")
        if not subject_id:
            raise TokenInvalidError("Token inválido")
        return VerifiedIdentity(subject_id=subject_id, email=claims.get("email"))

    async def create_account(
        self, *, email: str, password: str, display_name: str
    ) -> str:
        try:
            record = await asyncio.to_thread(
                auth.create_user,
                email=email,
                password=password,
                display_name=display_name,
                app=self._app,
            )
        except auth.EmailAlreadyExistsError as exc:
            raise AccountExistsError(email) from exc
        except (FirebaseError, ValueError) as exc:
            raise IdentityProviderError(
                f"No se pudo crear la cuenta: {exc}", original_error=exc
            ) from exc
        return record.uid

    async def disable_account(self, subject_id: str) -> None:
        try:
            await asyncio.to_thread(
                auth.update_user, subject_id, disabled=True, app=self._app
            )
        except (FirebaseError, ValueError) as exc:
            raise IdentityProviderError(
                f"No se pudo deshabilitar la cuenta {subject_id}: {exc}",
                original_error=exc,
            ) from exc
