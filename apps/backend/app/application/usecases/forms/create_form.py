"""
===============================================================================
USE CASE: Create Form
===============================================================================

Business Goal:
    Un admin publica formularios para su municipio; el superadmin para
    cualquier municipio (explícito).

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    CreateFormUseCase

Responsibilities:
    - Consultar la policy (CREATE sobre FORM).
    - Resolver el municipio efectivo: el forzado por la policy pisa al
      enviado por el caller.
    - Validar título y campos; persistir con creadoPor = caller.

Error Mapping:
    - FORBIDDEN: usuario / anónimo
    - VALIDATION_ERROR: sin municipio (superadmin) / sin campos / título vacío
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

from ....domain.access_policy import Operation, ResourceKind, ResourceTarget, evaluate
from ....domain.entities import FieldSpec, Form
from ....domain.repositories import FormRepository
from ....identity.users import AuthorizationProfile
from ..errors import RESOURCE_FORM, forbidden, validation_error
from .form_results import FormResult


@dataclass(frozen=True)
class CreateFormInput:
    title: str
    fields: List[FieldSpec] = field(default_factory=list)
    description: str | None = None
    municipality: str | None = None
    active: bool = True


class CreateFormUseCase:
    def __init__(self, form_repository: FormRepository) -> None:
        self._forms = form_repository

    async def execute(
        self, input_data: CreateFormInput, profile: AuthorizationProfile
    ) -> FormResult:
        decision = evaluate(
            profile,
            Operation.CREATE,
            ResourceTarget(ResourceKind.FORM, municipality=input_data.municipality),
        )
        if not decision.allowed:
            return FormResult(error=forbidden(RESOURCE_FORM))

        municipality = input_data.municipality
        if decision.scope is not None and decision.scope.municipality is not None:
            municipality = decision.scope.municipality
        municipality = (municipality or "").strip()
        if not municipality:
            return FormResult(
                error=validation_error("El municipio es obligatorio", RESOURCE_FORM)
            )

        title = input_data.title.strip()
        if not title:
            return FormResult(
                error=validation_error("El título es obligatorio", RESOURCE_FORM)
            )
        if not input_data.fields:
            return FormResult(
                error=validation_error(
                    "El formulario debe tener al menos un campo", RESOURCE_FORM
                )
            )

        now = datetime.now(timezone.utc)
        form = Form(
            id="",
            title=title,
            description=input_data.description,
            fields=list(input_data.fields),
            municipality=municipality,
            created_by=profile.subject_id or "",
            active=input_data.active,
            created_at=now,
            updated_at=now,
        )
        return FormResult(form=await self._forms.create_form(form))
