"""
===============================================================================
USE CASE: Create Submission (trámite)
===============================================================================

Business Goal:
    Un ciudadano (o cualquier rol autenticado) responde un formulario activo.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    CreateSubmissionUseCase

Responsibilities:
    - Pre-chequeo de la policy (anónimo => FORBIDDEN, sin leer el store).
    - Cargar el formulario: inexistente => NOT_FOUND (Formulario),
      inactivo => UNAVAILABLE.
    - Copiar título y municipio del formulario (snapshot histórico).
    - Forzar submitter = caller (scope de la policy), estado pendiente,
      comentarios "".

Notas:
    - No hay transacción entre leer el formulario y escribir el trámite: un
      formulario desactivado en ese intervalo puede recibir un último trámite.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

from ....domain.access_policy import Operation, ResourceKind, ResourceTarget, evaluate
from ....domain.entities import Submission, SubmissionStatus
from ....domain.repositories import FormRepository, SubmissionRepository
from ....identity.users import AuthorizationProfile
from ..errors import RESOURCE_FORM, RESOURCE_SUBMISSION, forbidden, not_found, unavailable
from .submission_results import SubmissionResult


@dataclass(frozen=True)
class CreateSubmissionInput:
    form_id: str
    answers: Dict[str, Any] = field(default_factory=dict)
    submitter_name: str | None = None


class CreateSubmissionUseCase:
    def __init__(
        self,
        submission_repository: SubmissionRepository,
        form_repository: FormRepository,
    ) -> None:
        self._submissions = submission_repository
        self._forms = form_repository

    async def execute(
        self, input_data: CreateSubmissionInput, profile: AuthorizationProfile
    ) -> SubmissionResult:
        decision = evaluate(
            profile, Operation.CREATE, ResourceTarget(ResourceKind.SUBMISSION)
        )
        if not decision.allowed:
            return SubmissionResult(error=forbidden(RESOURCE_SUBMISSION))

        form = await self._forms.get_form(input_data.form_id)
        if form is None:
            return SubmissionResult(error=not_found(RESOURCE_FORM))
        if not form.active:
            return SubmissionResult(
                error=unavailable("El formulario no está disponible", RESOURCE_FORM)
            )

        submitter_id = profile.subject_id or ""
        if decision.scope is not None and decision.scope.submitter_id is not None:
            submitter_id = decision.scope.submitter_id

        now = datetime.now(timezone.utc)
        submission = Submission(
            id="",
            form_id=form.id,
            form_title=form.title,
            municipality=form.municipality,
            submitter_id=submitter_id,
            submitter_name=(input_data.submitter_name or "").strip() or profile.display_name,
            answers=dict(input_data.answers),
            status=SubmissionStatus.PENDING,
            comments="",
            created_at=now,
            updated_at=now,
        )
        return SubmissionResult(
            submission=await self._submissions.create_submission(submission)
        )
