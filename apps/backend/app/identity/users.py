"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario y Perfil de Autorización

Responsabilidades:
    - Definir el enum cerrado de roles (superadmin / admin / usuario).
    - Definir el dataclass User (cuenta autenticable persistida en `usuarios`).
    - Definir AuthorizationProfile: la identidad explícita del caller que
      viaja hacia cada caso de uso (nunca se "cuelga" del request).
    - Validar el invariante rol ⟺ municipio.

Colaboradores:
    - identity/gateway.py: construye AuthorizationProfile desde User.
    - domain/access_policy.py: decide usando AuthorizationProfile.
    - infrastructure/repositories/user_repository.py: mapea registros -> User.

Notas:
    - role = admin ⟺ municipality != None.
    - role ∈ {superadmin, usuario} ⟺ municipality = None.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    """Roles soportados (enumeración cerrada)."""

    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    USER = "usuario"


@dataclass(frozen=True, slots=True)
class User:
    """Cuenta de usuario (PK = subject_id del identity provider)."""

    subject_id: str
    email: str
    display_name: str
    role: UserRole
    municipality: str | None = None
    active: bool = True
    created_at: datetime | None = None
    last_access_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class AuthorizationProfile:
    """
    Perfil de autorización derivado por request.

    - role None => caller anónimo (ver ANONYMOUS).
    - Los perfiles inactivos nunca llegan a la policy: el gateway los rechaza.
    """

    subject_id: str | None
    role: UserRole | None
    municipality: str | None = None
    active: bool = True
    display_name: str = ""

    @property
    def is_anonymous(self) -> bool:
        return self.subject_id is None or self.role is None

    @classmethod
    def from_user(cls, user: User) -> "AuthorizationProfile":
        return cls(
            subject_id=user.subject_id,
            role=user.role,
            municipality=user.municipality,
            active=user.active,
            display_name=user.display_name,
        )


ANONYMOUS = AuthorizationProfile(subject_id=None, role=None, active=False)


def role_municipality_error(role: UserRole, municipality: str | None) -> str | None:
    """
    Devuelve un mensaje si (role, municipality) viola el invariante.

    None => par válido.
    """
    has_municipality = bool(municipality and municipality.strip())
    if role == UserRole.ADMIN and not has_municipality:
        return "El municipio es requerido para administradores."
    if role != UserRole.ADMIN and municipality is not None:
        return "Solo los administradores tienen municipio asignado."
    return None
