"""
============================================================
TARJETA CRC — infrastructure/repositories/records.py
============================================================
Module: Mapeo entidad <-> registro persistido

Responsibilities:
  - Definir el contrato de claves persistidas (compatibles con los datos
    existentes en Firestore: `nombre`, `rol`, `municipio`, ...).
  - Traducir filtros / patches expresados con nombres de atributos de
    dominio a claves persistidas.
  - Serializar timestamps como ISO-8601 UTC y enums por su `.value`.

Collaborators:
  - Store*Repository (user / form / submission)

Constraints / Notes:
  - Claves desconocidas en un patch => ValueError (bug del caller, no input).
  - Timestamps: se aceptan strings ISO y datetime (Timestamp de Firestore).
============================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional

# ------------------------------------------------------------
# Contrato de claves (atributo de dominio -> clave persistida)
# ------------------------------------------------------------
USER_KEYS: Dict[str, str] = {
    "subject_id": "uid",
    "email": "email",
    "display_name": "nombre",
    "role": "rol",
    "municipality": "municipio",
    "active": "activo",
    "created_at": "creadoEn",
    "last_access_at": "ultimoAcceso",
}

FORM_KEYS: Dict[str, str] = {
    "title": "titulo",
    "description": "descripcion",
    "fields": "campos",
    "active": "activo",
    "municipality": "municipio",
    "created_by": "creadoPor",
    "created_at": "creadoEn",
    "updated_at": "actualizadoEn",
}

FIELD_SPEC_KEYS: Dict[str, str] = {
    "name": "nombre",
    "kind": "tipo",
    "label": "etiqueta",
    "required": "requerido",
}

SUBMISSION_KEYS: Dict[str, str] = {
    "form_id": "formularioId",
    "form_title": "formularioTitulo",
    "municipality": "municipio",
    "submitter_id": "usuarioId",
    "submitter_name": "usuarioNombre",
    "answers": "respuestas",
    "status": "estado",
    "comments": "comentarios",
    "created_at": "creadoEn",
    "updated_at": "actualizadoEn",
}


# ------------------------------------------------------------
# Valores
# ------------------------------------------------------------
def to_iso(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def from_iso(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def to_stored_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return to_iso(value)
    return value


def translate(
    values: Mapping[str, Any],
    keys: Mapping[str, str],
    *,
    converters: Mapping[str, Any] | None = None,
) -> Dict[str, Any]:
    """
    Traduce {atributo: valor} a {clave_persistida: valor_serializado}.

    converters permite serializar atributos compuestos (ej: fields).
    """
    converters = converters or {}
    out: Dict[str, Any] = {}
    for attribute, value in values.items():
        if attribute not in keys:
            raise ValueError(f"Atributo no persistible: {attribute}")
        convert = converters.get(attribute, to_stored_value)
        out[keys[attribute]] = convert(value)
    return out
