"""
===============================================================================
USE CASE: List Users
===============================================================================

Responsibilities:
    - Consultar la policy (LIST sobre USER: solo superadmin).
    - Aplicar el scope forzado al UserFilter y listar (creadoEn DESC).

Collaborators:
    - UserRepository.list_users
    - access_policy.evaluate / value_objects.apply_scope
===============================================================================
"""

from __future__ import annotations

from ....domain.access_policy import Operation, ResourceKind, ResourceTarget, evaluate
from ....domain.repositories import UserRepository
from ....domain.value_objects import UserFilter, apply_scope
from ....identity.users import AuthorizationProfile
from ..errors import RESOURCE_USER, forbidden
from .user_results import UserListResult


class ListUsersUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    async def execute(
        self, profile: AuthorizationProfile, filters: UserFilter | None = None
    ) -> UserListResult:
        decision = evaluate(profile, Operation.LIST, ResourceTarget(ResourceKind.USER))
        if not decision.allowed:
            return UserListResult(error=forbidden(RESOURCE_USER))

        scoped = apply_scope(filters or UserFilter(), decision.scope)
        return UserListResult(users=await self._users.list_users(scoped))
