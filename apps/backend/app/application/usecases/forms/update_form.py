"""
===============================================================================
USE CASE: Update Form
===============================================================================

Business Goal:
    Editar título, descripción, campos, estado o municipio de un formulario
    respetando el aislamiento por municipio.

Flujo (mutación):
    1) Pre-chequeo por rol (sin leer el store).
    2) Patch vacío => VALIDATION_ERROR.
    3) Cargar => NOT_FOUND.
    4) Chequeo completo contra el formulario cargado => FORBIDDEN.
    5) Persistir; si el registro desaparece al escribir => NOT_FOUND.

Reglas:
    - Admin: el municipio forzado por la policy pisa al del patch (un admin
      no puede mover formularios a otro municipio).
    - creadoPor / creadoEn nunca cambian.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict

from ....domain.access_policy import Operation, evaluate
from ....domain.repositories import FormRepository, RecordNotFoundError
from ....identity.users import AuthorizationProfile
from ..errors import RESOURCE_FORM, forbidden, not_found, validation_error
from ..patching import UNSET, all_unset
from .form_access import FORM_ROLE_TARGET, form_target
from .form_results import FormResult


@dataclass(frozen=True)
class FormPatch:
    title: Any = UNSET
    description: Any = UNSET
    fields: Any = UNSET
    active: Any = UNSET
    municipality: Any = UNSET

    def is_empty(self) -> bool:
        return all_unset(
            self.title, self.description, self.fields, self.active, self.municipality
        )


class UpdateFormUseCase:
    def __init__(self, form_repository: FormRepository) -> None:
        self._forms = form_repository

    async def execute(
        self, profile: AuthorizationProfile, form_id: str, patch: FormPatch
    ) -> FormResult:
        if not evaluate(profile, Operation.UPDATE, FORM_ROLE_TARGET).allowed:
            return FormResult(error=forbidden(RESOURCE_FORM))

        if patch.is_empty():
            return FormResult(
                error=validation_error("No hay campos válidos para actualizar", RESOURCE_FORM)
            )

        form = await self._forms.get_form(form_id)
        if form is None:
            return FormResult(error=not_found(RESOURCE_FORM))

        decision = evaluate(profile, Operation.UPDATE, form_target(form))
        if not decision.allowed:
            return FormResult(error=forbidden(RESOURCE_FORM))

        changes: Dict[str, Any] = {}

        if patch.title is not UNSET:
            title = (patch.title or "").strip()
            if not title:
                return FormResult(
                    error=validation_error("El título es obligatorio", RESOURCE_FORM)
                )
            changes["title"] = title

        if patch.description is not UNSET:
            changes["description"] = patch.description

        if patch.fields is not UNSET:
            if not patch.fields:
                return FormResult(
                    error=validation_error(
                        "El formulario debe tener al menos un campo", RESOURCE_FORM
                    )
                )
            changes["fields"] = list(patch.fields)

        if patch.active is not UNSET:
            changes["active"] = bool(patch.active)

        if patch.municipality is not UNSET:
            municipality = (patch.municipality or "").strip()
            if not municipality:
                return FormResult(
                    error=validation_error("El municipio es obligatorio", RESOURCE_FORM)
                )
            changes["municipality"] = municipality

        forced = decision.scope
        if forced is not None and forced.municipality is not None:
            if "municipality" in changes:
                changes["municipality"] = forced.municipality

        changes["updated_at"] = datetime.now(timezone.utc)
        try:
            await self._forms.update_form(form_id, changes)
        except RecordNotFoundError:
            return FormResult(error=not_found(RESOURCE_FORM))

        return FormResult(form=replace(form, **changes))
