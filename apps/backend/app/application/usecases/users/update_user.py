"""
===============================================================================
USE CASE: Update User (nombre / rol / municipio / activo)
===============================================================================

Business Goal:
    Permitir al superadmin reasignar roles y municipios manteniendo el
    invariante role = admin ⟺ municipality != None.

Reglas:
    - Debe venir al menos un campo (patch vacío => VALIDATION_ERROR).
    - Cambio de rol a no-admin limpia el municipio, salvo que el patch lo
      envíe explícitamente (en cuyo caso la validación lo rechaza).
    - Cambio de rol a admin exige municipio (del patch o el actual).
    - activo=False acá NO deshabilita la cuenta en el identity provider
      (eso es DeactivateUser).

Error Mapping:
    - FORBIDDEN: caller no superadmin (sin leer el store)
    - VALIDATION_ERROR: patch vacío / par rol-municipio inválido
    - NOT_FOUND: usuario inexistente (también si desaparece al escribir)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict

from ....domain.access_policy import Operation, ResourceKind, ResourceTarget, evaluate
from ....domain.repositories import RecordNotFoundError, UserRepository
from ....identity.users import AuthorizationProfile, UserRole, role_municipality_error
from ..errors import RESOURCE_USER, forbidden, not_found, validation_error
from ..patching import UNSET, all_unset
from .user_results import UserResult


@dataclass(frozen=True)
class UserPatch:
    """Campos no enviados quedan en UNSET (distinto de None)."""

    display_name: Any = UNSET
    role: Any = UNSET
    municipality: Any = UNSET
    active: Any = UNSET

    def is_empty(self) -> bool:
        return all_unset(self.display_name, self.role, self.municipality, self.active)


class UpdateUserUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    async def execute(
        self,
        profile: AuthorizationProfile,
        subject_id: str,
        patch: UserPatch,
    ) -> UserResult:
        target = ResourceTarget(ResourceKind.USER, owner_id=subject_id)
        if not evaluate(profile, Operation.UPDATE, target).allowed:
            return UserResult(error=forbidden(RESOURCE_USER))

        if patch.is_empty():
            return UserResult(
                error=validation_error("No hay campos válidos para actualizar", RESOURCE_USER)
            )

        current = await self._users.get_user(subject_id)
        if current is None:
            return UserResult(error=not_found(RESOURCE_USER))

        changes: Dict[str, Any] = {}

        if patch.display_name is not UNSET:
            display_name = (patch.display_name or "").strip()
            if not display_name:
                return UserResult(
                    error=validation_error("El nombre no puede estar vacío", RESOURCE_USER)
                )
            changes["display_name"] = display_name

        role = current.role
        municipality = current.municipality
        if patch.role is not UNSET:
            role = UserRole(patch.role)
            changes["role"] = role
            if role != UserRole.ADMIN:
                municipality = None
        if patch.municipality is not UNSET:
            municipality = (patch.municipality or "").strip() or None

        pairing_error = role_municipality_error(role, municipality)
        if pairing_error:
            return UserResult(error=validation_error(pairing_error, RESOURCE_USER))
        if municipality != current.municipality:
            changes["municipality"] = municipality

        if patch.active is not UNSET:
            changes["active"] = bool(patch.active)

        if changes:
            try:
                await self._users.update_user(subject_id, changes)
            except RecordNotFoundError:
                return UserResult(error=not_found(RESOURCE_USER))

        return UserResult(user=replace(current, **changes))
