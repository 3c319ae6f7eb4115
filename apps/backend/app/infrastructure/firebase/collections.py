"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations: collections appear on first write.
These constants are the single source of truth for the "schema" shared by
the Firestore store, the in-memory store and the repositories.

Example:
    from app.infrastructure.firebase.client import get_firestore_client
    from app.infrastructure.firebase.collections import COLLECTION_FORMS

    db = get_firestore_client()
    await db.collection(COLLECTION_FORMS).document(form_id).get()
"""

COLLECTION_USERS = "usuarios"
COLLECTION_FORMS = "formularios"
COLLECTION_SUBMISSIONS = "tramites"

# Ordering key shared by every collection (ISO-8601 UTC strings).
FIELD_CREATED_AT = "creadoEn"
