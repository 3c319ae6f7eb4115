"""
============================================================
TARJETA CRC — infrastructure/repositories/submission_repository.py
============================================================
Class: StoreSubmissionRepository

Responsibilities:
  - Implementar domain.repositories.SubmissionRepository sobre un DocumentStore.
  - Mapear registros `tramites` <-> Submission.

Collaborators:
  - domain.repositories.DocumentStore
  - domain.entities.Submission / SubmissionStatus
  - records.SUBMISSION_KEYS

Constraints / Notes:
  - formularioTitulo / municipio son snapshot: el repositorio los persiste
    tal cual, nunca los recalcula.
  - Orden estable en listados: creadoEn DESC.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional

from ...crosscutting.exceptions import StoreError
from ...domain.entities import Submission, SubmissionStatus
from ...domain.repositories import DocumentStore, OrderBy
from ...domain.value_objects import SubmissionFilter
from ..firebase.collections import COLLECTION_SUBMISSIONS, FIELD_CREATED_AT
from .records import SUBMISSION_KEYS, from_iso, to_iso, translate

_ORDER = OrderBy(FIELD_CREATED_AT)


def _record_to_submission(record: Mapping[str, Any]) -> Submission:
    try:
        status = SubmissionStatus(record.get("estado", SubmissionStatus.PENDING.value))
    except ValueError as exc:
        raise StoreError(
            f"Estado inválido en tramites/{record.get('id')}: {record.get('estado')}"
        ) from exc

    return Submission(
        id=record["id"],
        form_id=record.get("formularioId", ""),
        form_title=record.get("formularioTitulo", ""),
        municipality=record.get("municipio", ""),
        submitter_id=record.get("usuarioId", ""),
        submitter_name=record.get("usuarioNombre", ""),
        answers=dict(record.get("respuestas") or {}),
        status=status,
        comments=record.get("comentarios") or "",
        created_at=from_iso(record.get("creadoEn")),
        updated_at=from_iso(record.get("actualizadoEn")),
    )


def _submission_to_record(submission: Submission) -> Dict[str, Any]:
    return {
        "formularioId": submission.form_id,
        "formularioTitulo": submission.form_title,
        "municipio": submission.municipality,
        "usuarioId": submission.submitter_id,
        "usuarioNombre": submission.submitter_name,
        "respuestas": dict(submission.answers),
        "estado": submission.status.value,
        "comentarios": submission.comments,
        "creadoEn": to_iso(submission.created_at),
        "actualizadoEn": to_iso(submission.updated_at),
    }


class StoreSubmissionRepository:
    """SubmissionRepository respaldado por un DocumentStore (colección `tramites`)."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def get_submission(self, submission_id: str) -> Optional[Submission]:
        record = await self._store.get(COLLECTION_SUBMISSIONS, submission_id)
        return None if record is None else _record_to_submission(record)

    async def list_submissions(self, filters: SubmissionFilter) -> List[Submission]:
        records = await self._store.query(
            COLLECTION_SUBMISSIONS,
            translate(filters.to_equalities(), SUBMISSION_KEYS),
            order_by=_ORDER,
        )
        return [_record_to_submission(r) for r in records]

    async def create_submission(self, submission: Submission) -> Submission:
        submission_id = await self._store.insert(
            COLLECTION_SUBMISSIONS, _submission_to_record(submission)
        )
        return replace(submission, id=submission_id)

    async def update_submission(
        self, submission_id: str, changes: Mapping[str, Any]
    ) -> None:
        await self._store.update(
            COLLECTION_SUBMISSIONS,
            submission_id,
            translate(changes, SUBMISSION_KEYS, converters={"answers": dict}),
        )

    async def delete_submission(self, submission_id: str) -> None:
        await self._store.delete(COLLECTION_SUBMISSIONS, submission_id)
