"""
===============================================================================
USER USE CASE RESULTS
===============================================================================

Responsibilities:
    - Resultados tipados de los casos de uso de Users:
        * UserResult (un usuario)
        * UserListResult (listado)
        * DeactivateUserResult (comando "eliminar" = desactivar)

Collaborators:
    - identity.users.User
    - usecases.errors.UseCaseError
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ....identity.users import User
from ..errors import UseCaseError


@dataclass
class UserResult:
    """Si error is None => user presente."""

    user: User | None = None
    error: UseCaseError | None = None


@dataclass
class UserListResult:
    users: List[User] = field(default_factory=list)
    error: UseCaseError | None = None


@dataclass
class DeactivateUserResult:
    deactivated: bool = False
    subject_id: str | None = None
    error: UseCaseError | None = None
