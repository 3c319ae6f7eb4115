"""
===============================================================================
TARJETA CRC — schemas/submissions.py
===============================================================================

Módulo:
    Schemas HTTP para Trámites

Responsabilidades:
    - Validar alta (formularioId, respuestas) y patches (estado, comentarios,
      respuestas).
    - Exponer trámites y estadísticas con las claves públicas.

Notas:
    - usuarioId/municipio/formularioTitulo NO se aceptan en el alta: los fija
      el caso de uso (perfil del caller + snapshot del formulario).
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from app.domain.entities import Submission, SubmissionStatistics, SubmissionStatus
from pydantic import BaseModel, Field

from .envelope import ApiResponse, ListMeta

# Sin filtro de municipio (superadmin) las estadísticas se rotulan así.
ALL_MUNICIPALITIES = "Todos"


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateTramiteReq(BaseModel):
    formularioId: str = Field(..., min_length=1)
    respuestas: dict[str, Any] = Field(default_factory=dict)
    usuarioNombre: str | None = Field(default=None, max_length=100)


class UpdateTramiteReq(BaseModel):
    """Patch parcial: solo se aplican los campos enviados."""

    estado: SubmissionStatus | None = None
    comentarios: str | None = Field(default=None, max_length=2_000)
    respuestas: dict[str, Any] | None = None


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class TramiteRes(BaseModel):
    id: str
    formularioId: str
    formularioTitulo: str
    municipio: str
    usuarioId: str
    usuarioNombre: str
    respuestas: dict[str, Any]
    estado: SubmissionStatus
    comentarios: str = ""
    creadoEn: datetime | None = None
    actualizadoEn: datetime | None = None

    @classmethod
    def from_submission(cls, submission: Submission) -> "TramiteRes":
        return cls(
            id=submission.id,
            formularioId=submission.form_id,
            formularioTitulo=submission.form_title,
            municipio=submission.municipality,
            usuarioId=submission.submitter_id,
            usuarioNombre=submission.submitter_name,
            respuestas=dict(submission.answers),
            estado=submission.status,
            comentarios=submission.comments,
            creadoEn=submission.created_at,
            actualizadoEn=submission.updated_at,
        )


class TramiteEnvelope(ApiResponse):
    data: TramiteRes


class TramitesEnvelope(ListMeta):
    data: list[TramiteRes]


class TramiteEliminadoRes(BaseModel):
    id: str


class TramiteEliminadoEnvelope(ApiResponse):
    data: TramiteEliminadoRes


class EstadisticasRes(BaseModel):
    total: int
    pendientes: int
    enRevision: int
    aprobados: int
    rechazados: int
    municipio: str

    @classmethod
    def from_statistics(cls, stats: SubmissionStatistics) -> "EstadisticasRes":
        return cls(
            total=stats.total,
            pendientes=stats.pending,
            enRevision=stats.in_review,
            aprobados=stats.approved,
            rechazados=stats.rejected,
            municipio=stats.municipality or ALL_MUNICIPALITIES,
        )


class EstadisticasEnvelope(ApiResponse):
    data: EstadisticasRes
