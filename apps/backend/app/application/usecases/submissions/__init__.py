"""
===============================================================================
SUBMISSION USE CASES PACKAGE (Public API / Exports)
===============================================================================

Casos de uso de trámites: alta, listado, lectura, triage, borrado y
estadísticas. La autorización vive en domain.access_policy.
===============================================================================
"""

from __future__ import annotations

from .create_submission import CreateSubmissionInput, CreateSubmissionUseCase
from .delete_submission import DeleteSubmissionUseCase
from .get_submission import GetSubmissionUseCase
from .list_submissions import ListSubmissionsUseCase
from .submission_access import SUBMISSION_ROLE_TARGET, submission_target
from .submission_results import (
    DeleteSubmissionResult,
    SubmissionListResult,
    SubmissionResult,
    SubmissionStatisticsResult,
)
from .submission_statistics import SubmissionStatisticsUseCase
from .update_submission import SubmissionPatch, UpdateSubmissionUseCase

__all__ = [
    # Use Cases
    "CreateSubmissionInput",
    "CreateSubmissionUseCase",
    "DeleteSubmissionUseCase",
    "GetSubmissionUseCase",
    "ListSubmissionsUseCase",
    "SubmissionPatch",
    "SubmissionStatisticsUseCase",
    "UpdateSubmissionUseCase",
    # Helpers
    "SUBMISSION_ROLE_TARGET",
    "submission_target",
    # Results
    "DeleteSubmissionResult",
    "SubmissionListResult",
    "SubmissionResult",
    "SubmissionStatisticsResult",
]
