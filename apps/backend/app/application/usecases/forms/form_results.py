"""
===============================================================================
FORM USE CASE RESULTS
===============================================================================

Responsibilities:
    - Resultados tipados de los casos de uso de Forms:
        * FormResult / FormListResult
        * DeactivateFormResult (soft delete idempotente)
        * DeleteFormResult (borrado permanente)

Collaborators:
    - domain.entities.Form
    - usecases.errors.UseCaseError
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ....domain.entities import Form
from ..errors import UseCaseError


@dataclass
class FormResult:
    form: Form | None = None
    error: UseCaseError | None = None


@dataclass
class FormListResult:
    forms: List[Form] = field(default_factory=list)
    error: UseCaseError | None = None


@dataclass
class DeactivateFormResult:
    """
    deactivated=False con error None => ya estaba inactivo (no-op).
    """

    form: Form | None = None
    deactivated: bool = False
    error: UseCaseError | None = None


@dataclass
class DeleteFormResult:
    deleted: bool = False
    form_id: str | None = None
    error: UseCaseError | None = None
