"""
===============================================================================
USE CASE: Create User (registro por superadmin)
===============================================================================

Business Goal:
    Alta de cuentas (admin de un municipio, usuario o superadmin). Solo el
    superadmin registra usuarios: no existe auto-registro.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    CreateUserUseCase

Responsibilities:
    - Consultar la policy (CREATE sobre USER).
    - Validar el par rol/municipio.
    - Crear la cuenta en el identity provider y persistir el registro con el
      subject_id devuelto como clave.

Collaborators:
    - IdentityProvider.create_account (AccountExistsError => CONFLICT)
    - UserRepository.create_user
    - access_policy.evaluate

Error Mapping:
    - FORBIDDEN: caller no superadmin
    - VALIDATION_ERROR: admin sin municipio / no-admin con municipio
    - CONFLICT: email ya registrado
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from ....domain.access_policy import Operation, ResourceKind, ResourceTarget, evaluate
from ....domain.repositories import UserRepository
from ....domain.services import AccountExistsError, IdentityProvider
from ....identity.users import AuthorizationProfile, User, UserRole, role_municipality_error
from ..errors import RESOURCE_USER, conflict, forbidden, validation_error
from .user_results import UserResult


@dataclass(frozen=True)
class CreateUserInput:
    email: str
    password: str
    display_name: str
    role: UserRole
    municipality: str | None = None


class CreateUserUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        identity_provider: IdentityProvider,
    ) -> None:
        self._users = user_repository
        self._identity_provider = identity_provider

    async def execute(
        self, input_data: CreateUserInput, profile: AuthorizationProfile
    ) -> UserResult:
        decision = evaluate(profile, Operation.CREATE, ResourceTarget(ResourceKind.USER))
        if not decision.allowed:
            return UserResult(error=forbidden(RESOURCE_USER))

        municipality = (input_data.municipality or "").strip() or None
        pairing_error = role_municipality_error(input_data.role, municipality)
        if pairing_error:
            return UserResult(error=validation_error(pairing_error, RESOURCE_USER))

        email = input_data.email.strip().lower()
        display_name = input_data.display_name.strip()

        try:
            subject_id = await self._identity_provider.create_account(
                email=email,
                password=input_data.password,
                display_name=display_name,
            )
        except AccountExistsError:
            return UserResult(error=conflict("El email ya está registrado", RESOURCE_USER))

        user = User(
            subject_id=subject_id,
            email=email,
            display_name=display_name,
            role=input_data.role,
            municipality=municipality,
            active=True,
            created_at=datetime.now(timezone.utc),
        )
        created = await self._users.create_user(user)
        return UserResult(user=created)
