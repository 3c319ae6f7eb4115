"""
===============================================================================
USE CASE: Get User
===============================================================================

Responsibilities:
    - Lectura del propio perfil (cualquier rol) o de cualquier usuario
      (superadmin).
    - El id ES el subject: la decisión completa se toma antes de leer.

Error Mapping:
    - FORBIDDEN: perfil ajeno sin ser superadmin
    - NOT_FOUND: subject sin registro
===============================================================================
"""

from __future__ import annotations

from ....domain.access_policy import Operation, ResourceKind, ResourceTarget, evaluate
from ....domain.repositories import UserRepository
from ....identity.users import AuthorizationProfile
from ..errors import RESOURCE_USER, forbidden, not_found
from .user_results import UserResult


class GetUserUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    async def execute(self, profile: AuthorizationProfile, subject_id: str) -> UserResult:
        target = ResourceTarget(ResourceKind.USER, owner_id=subject_id)
        if not evaluate(profile, Operation.READ, target).allowed:
            return UserResult(error=forbidden(RESOURCE_USER))

        user = await self._users.get_user(subject_id)
        if user is None:
            return UserResult(error=not_found(RESOURCE_USER))
        return UserResult(user=user)
