"""
===============================================================================
USE CASE: Submission Statistics
===============================================================================

Responsibilities:
    - Contar trámites por estado.
    - Admin: siempre su municipio (el parámetro del caller se ignora).
    - Superadmin: municipio opcional (None => todos).
    - Usuario / anónimo: FORBIDDEN.
===============================================================================
"""

from __future__ import annotations

from collections import Counter

from ....domain.access_policy import Operation, evaluate
from ....domain.entities import SubmissionStatistics, SubmissionStatus
from ....domain.repositories import SubmissionRepository
from ....domain.value_objects import SubmissionFilter, apply_scope
from ....identity.users import AuthorizationProfile
from ..errors import RESOURCE_SUBMISSION, forbidden
from .submission_access import SUBMISSION_ROLE_TARGET
from .submission_results import SubmissionStatisticsResult


class SubmissionStatisticsUseCase:
    def __init__(self, submission_repository: SubmissionRepository) -> None:
        self._submissions = submission_repository

    async def execute(
        self, profile: AuthorizationProfile, municipality: str | None = None
    ) -> SubmissionStatisticsResult:
        decision = evaluate(profile, Operation.STATISTICS, SUBMISSION_ROLE_TARGET)
        if not decision.allowed:
            return SubmissionStatisticsResult(error=forbidden(RESOURCE_SUBMISSION))

        filters = apply_scope(SubmissionFilter(municipality=municipality), decision.scope)
        submissions = await self._submissions.list_submissions(filters)
        counts = Counter(s.status for s in submissions)

        return SubmissionStatisticsResult(
            statistics=SubmissionStatistics(
                total=len(submissions),
                pending=counts[SubmissionStatus.PENDING],
                in_review=counts[SubmissionStatus.IN_REVIEW],
                approved=counts[SubmissionStatus.APPROVED],
                rejected=counts[SubmissionStatus.REJECTED],
                municipality=filters.municipality,
            )
        )
