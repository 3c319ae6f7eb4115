"""
===============================================================================
SUBMISSION ACCESS HELPERS
===============================================================================

Responsibilities:
    - ResourceTarget de un trámite cargado (municipio + submitter).
    - Target de pre-chequeo por rol (atributos desconocidos).
===============================================================================
"""

from __future__ import annotations

from ....domain.access_policy import ResourceKind, ResourceTarget
from ....domain.entities import Submission

SUBMISSION_ROLE_TARGET = ResourceTarget(ResourceKind.SUBMISSION)


def submission_target(submission: Submission) -> ResourceTarget:
    return ResourceTarget(
        ResourceKind.SUBMISSION,
        municipality=submission.municipality,
        owner_id=submission.submitter_id,
    )
