"""
===============================================================================
USE CASE: Delete Submission (borrado permanente)
===============================================================================

Reglas:
    - Quién puede borrar lo define SubmissionDeletePolicy (setting
      SUBMISSION_DELETE_POLICY):
        * any: cualquier caller autenticado dentro de su scope
        * staff: admin de su municipio / superadmin
        * superadmin: solo superadmin
    - Pre-chequeo por rol, luego NOT_FOUND, luego chequeo completo.
===============================================================================
"""

from __future__ import annotations

from ....domain.access_policy import Operation, SubmissionDeletePolicy, evaluate
from ....domain.repositories import RecordNotFoundError, SubmissionRepository
from ....identity.users import AuthorizationProfile
from ..errors import RESOURCE_SUBMISSION, forbidden, not_found
from .submission_access import SUBMISSION_ROLE_TARGET, submission_target
from .submission_results import DeleteSubmissionResult


class DeleteSubmissionUseCase:
    def __init__(
        self,
        submission_repository: SubmissionRepository,
        delete_policy: SubmissionDeletePolicy = SubmissionDeletePolicy.ANY,
    ) -> None:
        self._submissions = submission_repository
        self._delete_policy = delete_policy

    async def execute(
        self, profile: AuthorizationProfile, submission_id: str
    ) -> DeleteSubmissionResult:
        pre_check = evaluate(
            profile,
            Operation.HARD_DELETE,
            SUBMISSION_ROLE_TARGET,
            submission_delete_policy=self._delete_policy,
        )
        if not pre_check.allowed:
            return DeleteSubmissionResult(error=forbidden(RESOURCE_SUBMISSION))

        submission = await self._submissions.get_submission(submission_id)
        if submission is None:
            return DeleteSubmissionResult(error=not_found(RESOURCE_SUBMISSION))

        decision = evaluate(
            profile,
            Operation.HARD_DELETE,
            submission_target(submission),
            submission_delete_policy=self._delete_policy,
        )
        if not decision.allowed:
            return DeleteSubmissionResult(error=forbidden(RESOURCE_SUBMISSION))

        try:
            await self._submissions.delete_submission(submission_id)
        except RecordNotFoundError:
            return DeleteSubmissionResult(error=not_found(RESOURCE_SUBMISSION))

        return DeleteSubmissionResult(deleted=True, submission_id=submission_id)
