"""
============================================================
TARJETA CRC — infrastructure/repositories/user_repository.py
============================================================
Class: StoreUserRepository

Responsibilities:
  - Implementar domain.repositories.UserRepository sobre un DocumentStore.
  - Usar el subject_id del identity provider como id del registro.
  - Mapear registros crudos -> entidad `User` y validar `UserRole`.

Collaborators:
  - domain.repositories.DocumentStore (Firestore / in-memory)
  - identity.users.User / UserRole
  - records.USER_KEYS (contrato de claves)

Constraints / Notes:
  - Repositorio puro: NO define reglas de negocio (pares rol/municipio, etc.).
  - Retorna None cuando no existe el recurso.
  - Rol persistido inválido => StoreError (datos corruptos, no input).
  - Orden estable en listados: creadoEn DESC.
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from ...crosscutting.exceptions import StoreError
from ...domain.repositories import DocumentStore, OrderBy
from ...domain.value_objects import UserFilter
from ...identity.users import User, UserRole
from ..firebase.collections import COLLECTION_USERS, FIELD_CREATED_AT
from .records import USER_KEYS, from_iso, to_iso, translate

_ORDER = OrderBy(FIELD_CREATED_AT)


def _record_to_user(record: Mapping[str, Any]) -> User:
    try:
        role = UserRole(record.get("rol"))
    except ValueError as exc:
        raise StoreError(f"Rol inválido en users/{record.get('id')}: {record.get('rol')}") from exc

    return User(
        subject_id=record.get("uid") or record["id"],
        email=record.get("email", ""),
        display_name=record.get("nombre", ""),
        role=role,
        municipality=record.get("municipio"),
        active=bool(record.get("activo", True)),
        created_at=from_iso(record.get("creadoEn")),
        last_access_at=from_iso(record.get("ultimoAcceso")),
    )


def _user_to_record(user: User) -> Dict[str, Any]:
    return {
        "uid": user.subject_id,
        "email": user.email,
        "nombre": user.display_name,
        "rol": user.role.value,
        "municipio": user.municipality,
        "activo": user.active,
        "creadoEn": to_iso(user.created_at),
        "ultimoAcceso": to_iso(user.last_access_at),
    }


class StoreUserRepository:
    """UserRepository respaldado por un DocumentStore (colección `usuarios`)."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def get_user(self, subject_id: str) -> Optional[User]:
        record = await self._store.get(COLLECTION_USERS, subject_id)
        return None if record is None else _record_to_user(record)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        records = await self._store.query(COLLECTION_USERS, {"email": email})
        return _record_to_user(records[0]) if records else None

    async def list_users(self, filters: UserFilter) -> List[User]:
        records = await self._store.query(
            COLLECTION_USERS,
            translate(filters.to_equalities(), USER_KEYS),
            order_by=_ORDER,
        )
        return [_record_to_user(r) for r in records]

    async def create_user(self, user: User) -> User:
        await self._store.put(COLLECTION_USERS, user.subject_id, _user_to_record(user))
        return user

    async def update_user(self, subject_id: str, changes: Mapping[str, Any]) -> None:
        await self._store.update(COLLECTION_USERS, subject_id, translate(changes, USER_KEYS))

    async def record_last_access(self, subject_id: str, at: datetime) -> None:
        await self._store.update(COLLECTION_USERS, subject_id, {"ultimoAcceso": to_iso(at)})
