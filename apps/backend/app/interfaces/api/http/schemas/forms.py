"""
===============================================================================
TARJETA CRC — schemas/forms.py
===============================================================================

Módulo:
    Schemas HTTP para Formularios

Responsabilidades:
    - Validar título/descripcion/campos con límites desde settings.
    - Exponer el formulario con las claves públicas (titulo, campos, ...).

Colaboradores:
    - domain.entities.Form / FieldSpec / FieldKind
    - crosscutting.config.get_settings (límites)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from app.crosscutting.config import get_settings
from app.domain.entities import FieldKind, FieldSpec, Form
from pydantic import BaseModel, Field, field_validator

from .envelope import ApiResponse, ListMeta

_settings = get_settings()

_Titulo = Annotated[
    str,
    Field(
        min_length=_settings.min_title_chars,
        max_length=_settings.max_title_chars,
        description="Título del formulario",
    ),
]
_Descripcion = Annotated[
    str, Field(max_length=_settings.max_description_chars)
]


class CampoSchema(BaseModel):
    """Campo de un formulario (entrada y salida)."""

    nombre: str = Field(..., min_length=1, max_length=100)
    tipo: FieldKind
    etiqueta: str = Field(..., min_length=1, max_length=200)
    requerido: bool = False

    def to_field_spec(self) -> FieldSpec:
        return FieldSpec(
            name=self.nombre.strip(),
            kind=self.tipo,
            label=self.etiqueta.strip(),
            required=self.requerido,
        )

    @classmethod
    def from_field_spec(cls, spec: FieldSpec) -> "CampoSchema":
        return cls(
            nombre=spec.name,
            tipo=spec.kind,
            etiqueta=spec.label,
            requerido=spec.required,
        )


_Campos = Annotated[
    list[CampoSchema],
    Field(min_length=1, max_length=_settings.max_form_fields),
]


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateFormularioReq(BaseModel):
    titulo: _Titulo
    descripcion: _Descripcion | None = None
    campos: _Campos
    municipio: str | None = Field(
        default=None,
        description="Obligatorio para superadmin; se ignora para admin",
    )
    activo: bool = True

    @field_validator("titulo", "descripcion", "municipio", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class UpdateFormularioReq(BaseModel):
    """Patch parcial: solo se aplican los campos enviados."""

    titulo: _Titulo | None = None
    descripcion: _Descripcion | None = None
    campos: _Campos | None = None
    activo: bool | None = None
    municipio: str | None = None

    @field_validator("titulo", "descripcion", "municipio", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class FormularioRes(BaseModel):
    id: str
    titulo: str
    descripcion: str | None = None
    campos: list[CampoSchema]
    activo: bool
    municipio: str
    creadoPor: str
    creadoEn: datetime | None = None
    actualizadoEn: datetime | None = None

    @classmethod
    def from_form(cls, form: Form) -> "FormularioRes":
        return cls(
            id=form.id,
            titulo=form.title,
            descripcion=form.description,
            campos=[CampoSchema.from_field_spec(f) for f in form.fields],
            activo=form.active,
            municipio=form.municipality,
            creadoPor=form.created_by,
            creadoEn=form.created_at,
            actualizadoEn=form.updated_at,
        )


class FormularioEnvelope(ApiResponse):
    data: FormularioRes


class FormulariosEnvelope(ListMeta):
    data: list[FormularioRes]


class FormularioEliminadoRes(BaseModel):
    id: str


class FormularioEliminadoEnvelope(ApiResponse):
    data: FormularioEliminadoRes
