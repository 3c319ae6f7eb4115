"""
Document stores (Infrastructure Layer)

Implementaciones de domain.repositories.DocumentStore:
  - FirestoreDocumentStore: producción (google-cloud-firestore async)
  - InMemoryDocumentStore: tests / desarrollo local
"""

from .firestore_store import FirestoreDocumentStore
from .in_memory_store import InMemoryDocumentStore

__all__ = ["FirestoreDocumentStore", "InMemoryDocumentStore"]
