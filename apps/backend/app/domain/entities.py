"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Form/Formulario, FieldSpec, Submission/Trámite)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Brindar helpers mínimos para mantener invariantes simples
      (soft delete idempotente, estados de trámite).

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - application/usecases: construyen/consumen estas entidades.
    - interfaces/api: serializan DTOs basados en estas entidades.

Principios:
    - Sin dependencias a Firestore/Firebase/FastAPI.
    - El snapshot de un trámite (form_title, municipality) es histórico:
      nunca se recalcula desde el formulario actual.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


def _utcnow() -> datetime:
    """Fecha/hora UTC (helper interno)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Form (formulario)
# ---------------------------------------------------------------------------


class FieldKind(str, Enum):
    """Tipos de campo soportados por un formulario."""

    TEXT = "text"
    NUMBER = "number"
    EMAIL = "email"
    DATE = "date"
    SELECT = "select"
    TEXTAREA = "textarea"
    CHECKBOX = "checkbox"


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Definición de un campo dentro de un formulario."""

    name: str
    kind: FieldKind
    label: str
    required: bool = False


@dataclass
class Form:
    """
    Plantilla dinámica asociada a un único municipio.

    Invariante:
      - fields contiene al menos un FieldSpec.
    """

    id: str
    title: str
    fields: List[FieldSpec]
    municipality: str
    created_by: str
    description: Optional[str] = None
    active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def deactivate(self, *, at: datetime | None = None) -> bool:
        """
        Soft delete. Devuelve False si ya estaba inactivo (no-op).

        created_at nunca cambia.
        """
        if not self.active:
            return False
        self.active = False
        self.updated_at = at or _utcnow()
        return True


# ---------------------------------------------------------------------------
# Submission (trámite)
# ---------------------------------------------------------------------------


class SubmissionStatus(str, Enum):
    """Flujo: pendiente -> en_revision -> aprobado / rechazado."""

    PENDING = "pendiente"
    IN_REVIEW = "en_revision"
    APPROVED = "aprobado"
    REJECTED = "rechazado"


@dataclass
class Submission:
    """Respuesta de un ciudadano a un formulario."""

    id: str
    form_id: str
    form_title: str
    municipality: str
    submitter_id: str
    submitter_name: str
    answers: Dict[str, Any] = field(default_factory=dict)
    status: SubmissionStatus = SubmissionStatus.PENDING
    comments: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class SubmissionStatistics:
    """Conteo de trámites por estado (municipality None => todos)."""

    total: int
    pending: int
    in_review: int
    approved: int
    rejected: int
    municipality: Optional[str] = None
