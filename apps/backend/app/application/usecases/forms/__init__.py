"""
===============================================================================
FORM USE CASES PACKAGE (Public API / Exports)
===============================================================================

Casos de uso de formularios: alta, listado, lectura, edición, soft delete y
borrado permanente. La autorización vive en domain.access_policy.
===============================================================================
"""

from __future__ import annotations

from .create_form import CreateFormInput, CreateFormUseCase
from .deactivate_form import DeactivateFormUseCase
from .delete_form import DeleteFormUseCase
from .form_access import FORM_ROLE_TARGET, form_target
from .form_results import (
    DeactivateFormResult,
    DeleteFormResult,
    FormListResult,
    FormResult,
)
from .get_form import GetFormUseCase
from .list_forms import ListFormsUseCase
from .update_form import FormPatch, UpdateFormUseCase

__all__ = [
    # Use Cases
    "CreateFormInput",
    "CreateFormUseCase",
    "DeactivateFormUseCase",
    "DeleteFormUseCase",
    "FormPatch",
    "GetFormUseCase",
    "ListFormsUseCase",
    "UpdateFormUseCase",
    # Helpers
    "FORM_ROLE_TARGET",
    "form_target",
    # Results
    "DeactivateFormResult",
    "DeleteFormResult",
    "FormListResult",
    "FormResult",
]
