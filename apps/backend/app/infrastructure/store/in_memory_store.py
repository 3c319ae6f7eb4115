"""
============================================================
TARJETA CRC — infrastructure/store/in_memory_store.py
============================================================
Class: InMemoryDocumentStore

Responsibilities:
  - Implementar DocumentStore en memoria (tests / local dev).
  - Replicar la semántica de Firestore que usan los repositorios:
      - filtros de igualdad (AND)
      - ordering por un campo (None al final)
      - update/delete de un id inexistente => RecordNotFoundError

Collaborators:
  - domain.repositories.DocumentStore (contrato a implementar)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Copias defensivas: ningún caller comparte dicts con el store.
  - No persiste datos tras reiniciar la app.
============================================================
"""

from __future__ import annotations

import copy
from threading import Lock
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from ...domain.repositories import OrderBy, RecordNotFoundError, SortDirection


class InMemoryDocumentStore:
    """
    Store in-memory, thread-safe.

    Modelo mental:
    - _collections es {colección: {id: registro}}.
    - Los registros se guardan SIN la clave "id"; se agrega al leer.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    # =========================================================
    # Helpers internos
    # =========================================================
    @staticmethod
    def _with_id(record_id: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        out = copy.deepcopy(dict(record))
        out["id"] = record_id
        return out

    @staticmethod
    def _matches(record: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
        return all(record.get(field) == value for field, value in filters.items())

    @staticmethod
    def _sorted(records: List[Dict[str, Any]], order_by: OrderBy) -> List[Dict[str, Any]]:
        present = [r for r in records if r.get(order_by.field) is not None]
        missing = [r for r in records if r.get(order_by.field) is None]
        present.sort(
            key=lambda r: r[order_by.field],
            reverse=order_by.direction == SortDirection.DESCENDING,
        )
        return present + missing

    def _collection(self, name: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(name, {})

    # =========================================================
    # DocumentStore
    # =========================================================
    async def query(
        self,
        collection: str,
        filters: Mapping[str, Any],
        order_by: Optional[OrderBy] = None,
    ) -> List[Dict[str, Any]]:
        with self._lock:
            records = [
                self._with_id(record_id, record)
                for record_id, record in self._collection(collection).items()
                if self._matches(record, filters)
            ]
        if order_by is not None:
            records = self._sorted(records, order_by)
        return records

    async def get(self, collection: str, record_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            record = self._collection(collection).get(record_id)
            return None if record is None else self._with_id(record_id, record)

    async def insert(self, collection: str, record: Mapping[str, Any]) -> str:
        record_id = uuid4().hex
        with self._lock:
            self._collection(collection)[record_id] = copy.deepcopy(dict(record))
        return record_id

    async def put(
        self, collection: str, record_id: str, record: Mapping[str, Any]
    ) -> None:
        with self._lock:
            self._collection(collection)[record_id] = copy.deepcopy(dict(record))

    async def update(
        self, collection: str, record_id: str, changes: Mapping[str, Any]
    ) -> None:
        with self._lock:
            current = self._collection(collection).get(record_id)
            if current is None:
                raise RecordNotFoundError(collection, record_id)
            current.update(copy.deepcopy(dict(changes)))

    async def delete(self, collection: str, record_id: str) -> None:
        with self._lock:
            if self._collection(collection).pop(record_id, None) is None:
                raise RecordNotFoundError(collection, record_id)

    async def ping(self) -> bool:
        return True
