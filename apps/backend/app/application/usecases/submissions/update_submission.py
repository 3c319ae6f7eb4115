"""
===============================================================================
USE CASE: Update Submission (triage del staff)
===============================================================================

Reglas:
    - Solo staff: admin de su municipio o superadmin.
    - Campos editables: estado, comentarios, respuestas.
    - formularioId / formularioTitulo / municipio / usuarioId son inmutables.
    - actualizadoEn se renueva en cada escritura.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict

from ....domain.access_policy import Operation, evaluate
from ....domain.entities import SubmissionStatus
from ....domain.repositories import RecordNotFoundError, SubmissionRepository
from ....identity.users import AuthorizationProfile
from ..errors import RESOURCE_SUBMISSION, forbidden, not_found, validation_error
from ..patching import UNSET, all_unset
from .submission_access import SUBMISSION_ROLE_TARGET, submission_target
from .submission_results import SubmissionResult


@dataclass(frozen=True)
class SubmissionPatch:
    status: Any = UNSET
    comments: Any = UNSET
    answers: Any = UNSET

    def is_empty(self) -> bool:
        return all_unset(self.status, self.comments, self.answers)


class UpdateSubmissionUseCase:
    def __init__(self, submission_repository: SubmissionRepository) -> None:
        self._submissions = submission_repository

    async def execute(
        self,
        profile: AuthorizationProfile,
        submission_id: str,
        patch: SubmissionPatch,
    ) -> SubmissionResult:
        if not evaluate(profile, Operation.UPDATE, SUBMISSION_ROLE_TARGET).allowed:
            return SubmissionResult(error=forbidden(RESOURCE_SUBMISSION))

        if patch.is_empty():
            return SubmissionResult(
                error=validation_error(
                    "No hay campos válidos para actualizar", RESOURCE_SUBMISSION
                )
            )

        submission = await self._submissions.get_submission(submission_id)
        if submission is None:
            return SubmissionResult(error=not_found(RESOURCE_SUBMISSION))

        if not evaluate(profile, Operation.UPDATE, submission_target(submission)).allowed:
            return SubmissionResult(error=forbidden(RESOURCE_SUBMISSION))

        changes: Dict[str, Any] = {}
        if patch.status is not UNSET:
            changes["status"] = SubmissionStatus(patch.status)
        if patch.comments is not UNSET:
            changes["comments"] = patch.comments or ""
        if patch.answers is not UNSET:
            changes["answers"] = dict(patch.answers or {})
        changes["updated_at"] = datetime.now(timezone.utc)

        try:
            await self._submissions.update_submission(submission_id, changes)
        except RecordNotFoundError:
            return SubmissionResult(error=not_found(RESOURCE_SUBMISSION))

        return SubmissionResult(submission=replace(submission, **changes))
