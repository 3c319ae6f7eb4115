"""
===============================================================================
TARJETA CRC — infrastructure/firebase/client.py
===============================================================================

Responsabilidades:
  - Inicializar UNA sola vez la app de Firebase Admin (proceso completo).
  - Exponer el cliente async de Firestore compartido por toda la API.

Colaboradores:
  - crosscutting.config.Settings (credenciales / project id)
  - container.py (construye store e identity provider con estos singletons)

Notas:
  - Sin archivo de credenciales se usa Application Default Credentials
    (Cloud Run / GKE / gcloud auth application-default login).
  - Los clientes son de solo lectura luego de inicializados: no se
    re-inicializan por request ni se cierran hasta el fin del proceso.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.cloud.firestore import AsyncClient

from ...crosscutting.config import get_settings
from ...crosscutting.logger import logger


@lru_cache(maxsize=1)
def get_firebase_app() -> firebase_admin.App:
    """Inicializa (o reutiliza) la app default de Firebase Admin."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    settings = get_settings()
    if settings.firebase_credentials_file:
        credential = credentials.Certificate(settings.firebase_credentials_file)
    else:
        credential = credentials.ApplicationDefault()

    options = (
        {"projectId": settings.firebase_project_id}
        if settings.firebase_project_id
        else None
    )
    app = firebase_admin.initialize_app(credential, options)
    logger.info(
        "Firebase Admin inicializado",
        extra={
            "project_id": app.project_id,
            "explicit_credentials": bool(settings.firebase_credentials_file),
        },
    )
    return app


@lru_cache(maxsize=1)
def get_firestore_client() -> AsyncClient:
    """Cliente async de Firestore ligado a la app de Firebase Admin."""
    return firestore_async.client(get_firebase_app())
