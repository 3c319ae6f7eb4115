"""
===============================================================================
USER USE CASES PACKAGE (Public API / Exports)
===============================================================================

Casos de uso de cuentas: alta (superadmin), listado, lectura, edición y
desactivación. La autorización vive en domain.access_policy.
===============================================================================
"""

from __future__ import annotations

from ..patching import UNSET
from .create_user import CreateUserInput, CreateUserUseCase
from .deactivate_user import DeactivateUserUseCase
from .get_user import GetUserUseCase
from .list_users import ListUsersUseCase
from .update_user import UpdateUserUseCase, UserPatch
from .user_results import DeactivateUserResult, UserListResult, UserResult

__all__ = [
    # Use Cases
    "CreateUserInput",
    "CreateUserUseCase",
    "DeactivateUserUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "UpdateUserUseCase",
    "UserPatch",
    "UNSET",
    # Results
    "DeactivateUserResult",
    "UserListResult",
    "UserResult",
]
