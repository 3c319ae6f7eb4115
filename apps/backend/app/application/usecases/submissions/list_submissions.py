"""
===============================================================================
USE CASE: List Submissions
===============================================================================

Responsibilities:
    - Consultar la policy (LIST sobre SUBMISSION).
    - Scope forzado: admin => su municipio; usuario => sus trámites;
      superadmin => filtro del caller tal cual; anónimo => FORBIDDEN.
    - Listar ordenado por creadoEn DESC.
===============================================================================
"""

from __future__ import annotations

from ....domain.access_policy import Operation, evaluate
from ....domain.repositories import SubmissionRepository
from ....domain.value_objects import SubmissionFilter, apply_scope
from ....identity.users import AuthorizationProfile
from ..errors import RESOURCE_SUBMISSION, forbidden
from .submission_access import SUBMISSION_ROLE_TARGET
from .submission_results import SubmissionListResult


class ListSubmissionsUseCase:
    def __init__(self, submission_repository: SubmissionRepository) -> None:
        self._submissions = submission_repository

    async def execute(
        self,
        profile: AuthorizationProfile,
        filters: SubmissionFilter | None = None,
    ) -> SubmissionListResult:
        decision = evaluate(profile, Operation.LIST, SUBMISSION_ROLE_TARGET)
        if not decision.allowed:
            return SubmissionListResult(error=forbidden(RESOURCE_SUBMISSION))

        scoped = apply_scope(filters or SubmissionFilter(), decision.scope)
        return SubmissionListResult(
            submissions=await self._submissions.list_submissions(scoped)
        )
