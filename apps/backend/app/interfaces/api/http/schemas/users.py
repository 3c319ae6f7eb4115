"""
===============================================================================
TARJETA CRC — schemas/users.py
===============================================================================

Módulo:
    Schemas HTTP para autenticación y gestión de usuarios

Responsabilidades:
    - Validar el registro (email, password, nombre, rol, municipio).
    - Validar patches de usuario (solo campos presentes).
    - Serializar User con las claves públicas (uid, nombre, rol, ...).

Colaboradores:
    - identity.users.User / UserRole
    - crosscutting.config.get_settings (límites)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from app.crosscutting.config import get_settings
from app.identity.users import User, UserRole
from pydantic import BaseModel, EmailStr, Field, field_validator

from .envelope import ApiResponse, ListMeta

_settings = get_settings()

_Nombre = Annotated[
    str,
    Field(
        min_length=_settings.min_name_chars,
        max_length=_settings.max_name_chars,
        description="Nombre visible",
    ),
]


def _strip(value: str | None) -> str | None:
    return value.strip() if isinstance(value, str) else value


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class RegistroReq(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=_settings.min_password_chars)
    nombre: _Nombre
    rol: UserRole
    municipio: str | None = Field(default=None, max_length=_settings.max_name_chars)

    @field_validator("nombre", "municipio", mode="before")
    @classmethod
    def strip_text(cls, v):
        return _strip(v)


class UpdateUsuarioReq(BaseModel):
    """Patch parcial: solo se aplican los campos enviados."""

    nombre: _Nombre | None = None
    rol: UserRole | None = None
    municipio: str | None = Field(default=None, max_length=_settings.max_name_chars)
    activo: bool | None = None

    @field_validator("nombre", "municipio", mode="before")
    @classmethod
    def strip_text(cls, v):
        return _strip(v)


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class UsuarioRes(BaseModel):
    uid: str
    email: str
    nombre: str
    rol: UserRole
    municipio: str | None = None
    activo: bool = True
    creadoEn: datetime | None = None
    ultimoAcceso: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> "UsuarioRes":
        return cls(
            uid=user.subject_id,
            email=user.email,
            nombre=user.display_name,
            rol=user.role,
            municipio=user.municipality,
            activo=user.active,
            creadoEn=user.created_at,
            ultimoAcceso=user.last_access_at,
        )


class UsuarioEnvelope(ApiResponse):
    data: UsuarioRes


class UsuariosEnvelope(ListMeta):
    data: list[UsuarioRes]


class UsuarioDesactivadoRes(BaseModel):
    uid: str
    activo: bool = False


class UsuarioDesactivadoEnvelope(ApiResponse):
    data: UsuarioDesactivadoRes
