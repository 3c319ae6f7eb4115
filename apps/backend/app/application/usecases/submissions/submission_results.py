"""
===============================================================================
SUBMISSION USE CASE RESULTS
===============================================================================

Responsibilities:
    - Resultados tipados de los casos de uso de Submissions (trámites):
        * SubmissionResult / SubmissionListResult
        * DeleteSubmissionResult
        * SubmissionStatisticsResult

Collaborators:
    - domain.entities.Submission / SubmissionStatistics
    - usecases.errors.UseCaseError
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ....domain.entities import Submission, SubmissionStatistics
from ..errors import UseCaseError


@dataclass
class SubmissionResult:
    submission: Submission | None = None
    error: UseCaseError | None = None


@dataclass
class SubmissionListResult:
    submissions: List[Submission] = field(default_factory=list)
    error: UseCaseError | None = None


@dataclass
class DeleteSubmissionResult:
    deleted: bool = False
    submission_id: str | None = None
    error: UseCaseError | None = None


@dataclass
class SubmissionStatisticsResult:
    statistics: SubmissionStatistics | None = None
    error: UseCaseError | None = None
