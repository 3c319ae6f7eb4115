"""
===============================================================================
USE CASE: Get Form
===============================================================================

Responsibilities:
    - Leer un formulario (autenticación opcional: ANONYMOUS es válido).
    - NOT_FOUND antes que FORBIDDEN.
    - Admin: solo formularios de su municipio.
    - Usuario / anónimo: solo formularios activos.
===============================================================================
"""

from __future__ import annotations

from ....domain.access_policy import Operation, evaluate
from ....domain.repositories import FormRepository
from ....identity.users import AuthorizationProfile
from ..errors import RESOURCE_FORM, forbidden, not_found
from .form_access import form_target
from .form_results import FormResult


class GetFormUseCase:
    def __init__(self, form_repository: FormRepository) -> None:
        self._forms = form_repository

    async def execute(self, profile: AuthorizationProfile, form_id: str) -> FormResult:
        form = await self._forms.get_form(form_id)
        if form is None:
            return FormResult(error=not_found(RESOURCE_FORM))

        if not evaluate(profile, Operation.READ, form_target(form)).allowed:
            return FormResult(error=forbidden(RESOURCE_FORM))
        return FormResult(form=form)
