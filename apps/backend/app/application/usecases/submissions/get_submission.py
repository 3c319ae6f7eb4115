"""
===============================================================================
USE CASE: Get Submission
===============================================================================

Responsibilities:
    - Anónimo => FORBIDDEN sin leer el store.
    - NOT_FOUND antes que FORBIDDEN.
    - Admin: trámites de su municipio. Usuario: sus trámites.
===============================================================================
"""

from __future__ import annotations

from ....domain.access_policy import Operation, evaluate
from ....domain.repositories import SubmissionRepository
from ....identity.users import AuthorizationProfile
from ..errors import RESOURCE_SUBMISSION, forbidden, not_found
from .submission_access import SUBMISSION_ROLE_TARGET, submission_target
from .submission_results import SubmissionResult


class GetSubmissionUseCase:
    def __init__(self, submission_repository: SubmissionRepository) -> None:
        self._submissions = submission_repository

    async def execute(
        self, profile: AuthorizationProfile, submission_id: str
    ) -> SubmissionResult:
        if not evaluate(profile, Operation.READ, SUBMISSION_ROLE_TARGET).allowed:
            return SubmissionResult(error=forbidden(RESOURCE_SUBMISSION))

        submission = await self._submissions.get_submission(submission_id)
        if submission is None:
            return SubmissionResult(error=not_found(RESOURCE_SUBMISSION))

        if not evaluate(profile, Operation.READ, submission_target(submission)).allowed:
            return SubmissionResult(error=forbidden(RESOURCE_SUBMISSION))
        return SubmissionResult(submission=submission)
