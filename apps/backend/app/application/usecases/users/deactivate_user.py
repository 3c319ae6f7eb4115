"""
===============================================================================
USE CASE: Deactivate User ("eliminar" usuario)
===============================================================================

Business Goal:
    Los usuarios nunca se borran: se marcan activo=false y se deshabilita el
    inicio de sesión en el identity provider.

Reglas:
    - Orden: primero el store, luego el identity provider.
    - Si el identity provider falla, el error se propaga (Internal); el
      registro ya quedó inactivo y el gateway lo rechaza igual.
    - Idempotente: desactivar un usuario inactivo vuelve a deshabilitar la
      cuenta y responde OK.
===============================================================================
"""

from __future__ import annotations

from ....domain.access_policy import Operation, ResourceKind, ResourceTarget, evaluate
from ....domain.repositories import RecordNotFoundError, UserRepository
from ....domain.services import IdentityProvider
from ....identity.users import AuthorizationProfile
from ..errors import RESOURCE_USER, forbidden, not_found
from .user_results import DeactivateUserResult


class DeactivateUserUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        identity_provider: IdentityProvider,
    ) -> None:
        self._users = user_repository
        self._identity_provider = identity_provider

    async def execute(
        self, profile: AuthorizationProfile, subject_id: str
    ) -> DeactivateUserResult:
        target = ResourceTarget(ResourceKind.USER, owner_id=subject_id)
        if not evaluate(profile, Operation.SOFT_DELETE, target).allowed:
            return DeactivateUserResult(error=forbidden(RESOURCE_USER))

        if await self._users.get_user(subject_id) is None:
            return DeactivateUserResult(error=not_found(RESOURCE_USER))

        try:
            await self._users.update_user(subject_id, {"active": False})
        except RecordNotFoundError:
            return DeactivateUserResult(error=not_found(RESOURCE_USER))

        await self._identity_provider.disable_account(subject_id)
        return DeactivateUserResult(deactivated=True, subject_id=subject_id)
