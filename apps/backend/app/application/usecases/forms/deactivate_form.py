"""
===============================================================================
USE CASE: Deactivate Form (soft delete)
===============================================================================

Reglas:
    - DELETE /formularios/{id} NO borra: marca activo=false.
    - Idempotente: desactivar un formulario inactivo no escribe y responde OK
      con deactivated=False.
    - creadoEn nunca cambia; actualizadoEn solo cambia si hubo transición.
    - Los trámites existentes del formulario no se tocan.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone

from ....domain.access_policy import Operation, evaluate
from ....domain.repositories import FormRepository, RecordNotFoundError
from ....identity.users import AuthorizationProfile
from ..errors import RESOURCE_FORM, forbidden, not_found
from .form_access import FORM_ROLE_TARGET, form_target
from .form_results import DeactivateFormResult


class DeactivateFormUseCase:
    def __init__(self, form_repository: FormRepository) -> None:
        self._forms = form_repository

    async def execute(
        self, profile: AuthorizationProfile, form_id: str
    ) -> DeactivateFormResult:
        if not evaluate(profile, Operation.SOFT_DELETE, FORM_ROLE_TARGET).allowed:
            return DeactivateFormResult(error=forbidden(RESOURCE_FORM))

        form = await self._forms.get_form(form_id)
        if form is None:
            return DeactivateFormResult(error=not_found(RESOURCE_FORM))

        if not evaluate(profile, Operation.SOFT_DELETE, form_target(form)).allowed:
            return DeactivateFormResult(error=forbidden(RESOURCE_FORM))

        if not form.deactivate(at=datetime.now(timezone.utc)):
            return DeactivateFormResult(form=form, deactivated=False)

        try:
            await self._forms.update_form(
                form_id, {"active": False, "updated_at": form.updated_at}
            )
        except RecordNotFoundError:
            return DeactivateFormResult(error=not_found(RESOURCE_FORM))

        return DeactivateFormResult(form=form, deactivated=True)
