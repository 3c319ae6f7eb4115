"""
===============================================================================
USE CASE: List Forms
===============================================================================

Responsibilities:
    - Consultar la policy (LIST sobre FORM).
    - Combinar el filtro del caller con el scope forzado:
        * admin: municipio propio
        * usuario / anónimo: solo activos
        * superadmin: filtro del caller tal cual
    - Listar ordenado por creadoEn DESC.
===============================================================================
"""

from __future__ import annotations

from ....domain.access_policy import Operation, ResourceKind, ResourceTarget, evaluate
from ....domain.repositories import FormRepository
from ....domain.value_objects import FormFilter, apply_scope
from ....identity.users import AuthorizationProfile
from ..errors import RESOURCE_FORM, forbidden
from .form_results import FormListResult


class ListFormsUseCase:
    def __init__(self, form_repository: FormRepository) -> None:
        self._forms = form_repository

    async def execute(
        self, profile: AuthorizationProfile, filters: FormFilter | None = None
    ) -> FormListResult:
        decision = evaluate(profile, Operation.LIST, ResourceTarget(ResourceKind.FORM))
        if not decision.allowed:
            return FormListResult(error=forbidden(RESOURCE_FORM))

        scoped = apply_scope(filters or FormFilter(), decision.scope)
        return FormListResult(forms=await self._forms.list_forms(scoped))
