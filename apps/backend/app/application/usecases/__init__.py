"""
Use Cases Layer (Business Operations)

This package exposes entry points for business logic, organized by resource.

Structure
---------
usecases/
├── users/          # Accounts (superadmin management, own profile)
├── forms/          # Formularios per municipality
└── submissions/    # Trámites and their triage workflow

Every use case consults domain.access_policy.evaluate() before touching a
repository and returns a typed result (`error: UseCaseError | None`).

Usage
-----
Import from subpackages for clarity:

    from app.application.usecases.forms import CreateFormUseCase
    from app.application.usecases.submissions import ListSubmissionsUseCase

Or use the barrel exports from this module:

    from app.application.usecases import CreateFormUseCase, ListSubmissionsUseCase
"""

from .errors import ErrorCode, UseCaseError
from .forms import (
    CreateFormInput,
    CreateFormUseCase,
    DeactivateFormResult,
    DeactivateFormUseCase,
    DeleteFormResult,
    DeleteFormUseCase,
    FormListResult,
    FormPatch,
    FormResult,
    GetFormUseCase,
    ListFormsUseCase,
    UpdateFormUseCase,
)
from .patching import UNSET
from .submissions import (
    CreateSubmissionInput,
    CreateSubmissionUseCase,
    DeleteSubmissionResult,
    DeleteSubmissionUseCase,
    GetSubmissionUseCase,
    ListSubmissionsUseCase,
    SubmissionListResult,
    SubmissionPatch,
    SubmissionResult,
    SubmissionStatisticsResult,
    SubmissionStatisticsUseCase,
    UpdateSubmissionUseCase,
)
from .users import (
    CreateUserInput,
    CreateUserUseCase,
    DeactivateUserResult,
    DeactivateUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
    UserListResult,
    UserPatch,
    UserResult,
)

__all__ = [
    # Errors
    "ErrorCode",
    "UseCaseError",
    "UNSET",
    # Users
    "CreateUserInput",
    "CreateUserUseCase",
    "DeactivateUserResult",
    "DeactivateUserUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "UpdateUserUseCase",
    "UserListResult",
    "UserPatch",
    "UserResult",
    # Forms
    "CreateFormInput",
    "CreateFormUseCase",
    "DeactivateFormResult",
    "DeactivateFormUseCase",
    "DeleteFormResult",
    "DeleteFormUseCase",
    "FormListResult",
    "FormPatch",
    "FormResult",
    "GetFormUseCase",
    "ListFormsUseCase",
    "UpdateFormUseCase",
    # Submissions
    "CreateSubmissionInput",
    "CreateSubmissionUseCase",
    "DeleteSubmissionResult",
    "DeleteSubmissionUseCase",
    "GetSubmissionUseCase",
    "ListSubmissionsUseCase",
    "SubmissionListResult",
    "SubmissionPatch",
    "SubmissionResult",
    "SubmissionStatisticsResult",
    "SubmissionStatisticsUseCase",
    "UpdateSubmissionUseCase",
]
