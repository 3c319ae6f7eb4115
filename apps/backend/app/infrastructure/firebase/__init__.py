"""
Firebase (Infrastructure Layer)

Singletons de Firebase Admin / Firestore y nombres de colecciones.
"""

from .client import get_firebase_app, get_firestore_client
from .collections import (
    COLLECTION_FORMS,
    COLLECTION_SUBMISSIONS,
    COLLECTION_USERS,
    FIELD_CREATED_AT,
)

__all__ = [
    "get_firebase_app",
    "get_firestore_client",
    "COLLECTION_FORMS",
    "COLLECTION_SUBMISSIONS",
    "COLLECTION_USERS",
    "FIELD_CREATED_AT",
]
