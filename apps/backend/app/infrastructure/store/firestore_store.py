"""
===============================================================================
TARJETA CRC — infrastructure/store/firestore_store.py
===============================================================================

Class:
    FirestoreDocumentStore

Responsibilities:
    - Implementar domain.repositories.DocumentStore sobre Firestore (async).
    - Traducir filtros de igualdad y OrderBy a queries de Firestore.
    - Convertir fallas del SDK en StoreError (Internal) y "documento
      inexistente" en RecordNotFoundError.

Collaborators:
    - google.cloud.firestore.AsyncClient (vía infrastructure.firebase.client)
    - crosscutting.exceptions.StoreError

Notes:
    - Equality + order_by sobre campos distintos requiere índices compuestos
      en Firestore (firestore.indexes.json del proyecto).
    - No hay reintentos: el error se propaga con el mensaje original.
===============================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from ...crosscutting.exceptions import StoreError
from ...crosscutting.logger import logger
from ...domain.repositories import OrderBy, RecordNotFoundError, SortDirection

_DIRECTIONS = {
    SortDirection.ASCENDING: firestore.Query.ASCENDING,
    SortDirection.DESCENDING: firestore.Query.DESCENDING,
}


def _store_error(action: str, collection: str, exc: Exception) -> StoreError:
    return StoreError(
        f"Firestore {action} en '{collection}' falló: {exc}", original_error=exc
    )


class FirestoreDocumentStore:
    """DocumentStore respaldado por Firestore."""

    def __init__(self, client: firestore.AsyncClient) -> None:
        self._client = client

    @staticmethod
    def _to_record(snapshot) -> Dict[str, Any]:
        record = snapshot.to_dict() or {}
        record["id"] = snapshot.id
        return record

    async def query(
        self,
        collection: str,
        filters: Mapping[str, Any],
        order_by: Optional[OrderBy] = None,
    ) -> List[Dict[str, Any]]:
        query = self._client.collection(collection)
        for field, value in filters.items():
            query = query.where(filter=FieldFilter(field, "==", value))
        if order_by is not None:
            query = query.order_by(
                order_by.field, direction=_DIRECTIONS[order_by.direction]
            )

        try:
            return [self._to_record(snapshot) async for snapshot in query.stream()]
        except gcp_exceptions.GoogleAPIError as exc:
            raise _store_error("query", collection, exc) from exc

    async def get(self, collection: str, record_id: str) -> Optional[Dict[str, Any]]:
        try:
            snapshot = await self._client.collection(collection).document(record_id).get()
        except gcp_exceptions.GoogleAPIError as exc:
            raise _store_error("get", collection, exc) from exc
        if not snapshot.exists:
            return None
        return self._to_record(snapshot)

    async def insert(self, collection: str, record: Mapping[str, Any]) -> str:
        try:
            _, reference = await self._client.collection(collection).add(dict(record))
        except gcp_exceptions.GoogleAPIError as exc:
            raise _store_error("insert", collection, exc) from exc
        return reference.id

    async def put(
        self, collection: str, record_id: str, record: Mapping[str, Any]
    ) -> None:
        try:
            await self._client.collection(collection).document(record_id).set(
                dict(record)
            )
        except gcp_exceptions.GoogleAPIError as exc:
            raise _store_error("put", collection, exc) from exc

    async def update(
        self, collection: str, record_id: str, changes: Mapping[str, Any]
    ) -> None:
        try:
            await self._client.collection(collection).document(record_id).update(
                dict(changes)
            )
        except gcp_exceptions.NotFound as exc:
            raise RecordNotFoundError(collection, record_id) from exc
        except gcp_exceptions.GoogleAPIError as exc:
            raise _store_error("update", collection, exc) from exc

    async def delete(self, collection: str, record_id: str) -> None:
        reference = self._client.collection(collection).document(record_id)
        try:
            # Firestore no falla al borrar un documento inexistente.
            snapshot = await reference.get()
            if not snapshot.exists:
                raise RecordNotFoundError(collection, record_id)
            await reference.delete()
        except gcp_exceptions.GoogleAPIError as exc:
            raise _store_error("delete", collection, exc) from exc

    async def ping(self) -> bool:
        try:
            await self._client.collection("_health").limit(1).get()
            return True
        except gcp_exceptions.GoogleAPIError as exc:
            logger.warning("Firestore ping falló", extra={"error": str(exc)})
            return False
