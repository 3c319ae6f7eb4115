"""
============================================================
TARJETA CRC — infrastructure/repositories/form_repository.py
============================================================
Class: StoreFormRepository

Responsibilities:
  - Implementar domain.repositories.FormRepository sobre un DocumentStore.
  - Mapear registros `formularios` <-> Form / FieldSpec.

Collaborators:
  - domain.repositories.DocumentStore
  - domain.entities.Form / FieldSpec / FieldKind
  - records.FORM_KEYS / FIELD_SPEC_KEYS

Constraints / Notes:
  - update/delete de un id inexistente => RecordNotFoundError (del store).
  - Orden estable en listados: creadoEn DESC.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ...crosscutting.exceptions import StoreError
from ...domain.entities import FieldKind, FieldSpec, Form
from ...domain.repositories import DocumentStore, OrderBy
from ...domain.value_objects import FormFilter
from ..firebase.collections import COLLECTION_FORMS, FIELD_CREATED_AT
from .records import FORM_KEYS, from_iso, to_iso, translate

_ORDER = OrderBy(FIELD_CREATED_AT)


def _fields_to_records(fields: Sequence[FieldSpec]) -> List[Dict[str, Any]]:
    return [
        {
            "nombre": spec.name,
            "tipo": spec.kind.value,
            "etiqueta": spec.label,
            "requerido": spec.required,
        }
        for spec in fields
    ]


def _records_to_fields(form_id: str, raw: Sequence[Mapping[str, Any]]) -> List[FieldSpec]:
    try:
        return [
            FieldSpec(
                name=item.get("nombre", ""),
                kind=FieldKind(item.get("tipo")),
                label=item.get("etiqueta", ""),
                required=bool(item.get("requerido", False)),
            )
            for item in raw
        ]
    except ValueError as exc:
        raise StoreError(f"Campo inválido en formularios/{form_id}: {exc}") from exc


def _record_to_form(record: Mapping[str, Any]) -> Form:
    return Form(
        id=record["id"],
        title=record.get("titulo", ""),
        description=record.get("descripcion"),
        fields=_records_to_fields(record["id"], record.get("campos") or []),
        active=bool(record.get("activo", True)),
        municipality=record.get("municipio", ""),
        created_by=record.get("creadoPor", ""),
        created_at=from_iso(record.get("creadoEn")),
        updated_at=from_iso(record.get("actualizadoEn")),
    )


def _form_to_record(form: Form) -> Dict[str, Any]:
    return {
        "titulo": form.title,
        "descripcion": form.description,
        "campos": _fields_to_records(form.fields),
        "activo": form.active,
        "municipio": form.municipality,
        "creadoPor": form.created_by,
        "creadoEn": to_iso(form.created_at),
        "actualizadoEn": to_iso(form.updated_at),
    }


_CONVERTERS = {"fields": _fields_to_records}


class StoreFormRepository:
    """FormRepository respaldado por un DocumentStore (colección `formularios`)."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def get_form(self, form_id: str) -> Optional[Form]:
        record = await self._store.get(COLLECTION_FORMS, form_id)
        return None if record is None else _record_to_form(record)

    async def list_forms(self, filters: FormFilter) -> List[Form]:
        records = await self._store.query(
            COLLECTION_FORMS,
            translate(filters.to_equalities(), FORM_KEYS),
            order_by=_ORDER,
        )
        return [_record_to_form(r) for r in records]

    async def create_form(self, form: Form) -> Form:
        form_id = await self._store.insert(COLLECTION_FORMS, _form_to_record(form))
        return replace(form, id=form_id)

    async def update_form(self, form_id: str, changes: Mapping[str, Any]) -> None:
        await self._store.update(
            COLLECTION_FORMS,
            form_id,
            translate(changes, FORM_KEYS, converters=_CONVERTERS),
        )

    async def delete_form(self, form_id: str) -> None:
        await self._store.delete(COLLECTION_FORMS, form_id)
