"""
===============================================================================
USE CASE: Delete Form (borrado permanente)
===============================================================================

Reglas:
    - Solo superadmin.
    - Los trámites que referencian el formulario se conservan (snapshot de
      título y municipio).
===============================================================================
"""

from __future__ import annotations

from ....domain.access_policy import Operation, evaluate
from ....domain.repositories import FormRepository, RecordNotFoundError
from ....identity.users import AuthorizationProfile
from ..errors import RESOURCE_FORM, forbidden, not_found
from .form_access import FORM_ROLE_TARGET, form_target
from .form_results import DeleteFormResult


class DeleteFormUseCase:
    def __init__(self, form_repository: FormRepository) -> None:
        self._forms = form_repository

    async def execute(self, profile: AuthorizationProfile, form_id: str) -> DeleteFormResult:
        if not evaluate(profile, Operation.HARD_DELETE, FORM_ROLE_TARGET).allowed:
            return DeleteFormResult(error=forbidden(RESOURCE_FORM))

        form = await self._forms.get_form(form_id)
        if form is None:
            return DeleteFormResult(error=not_found(RESOURCE_FORM))

        if not evaluate(profile, Operation.HARD_DELETE, form_target(form)).allowed:
            return DeleteFormResult(error=forbidden(RESOURCE_FORM))

        try:
            await self._forms.delete_form(form_id)
        except RecordNotFoundError:
            return DeleteFormResult(error=not_found(RESOURCE_FORM))

        return DeleteFormResult(deleted=True, form_id=form_id)
