"""
============================================================
TARJETA CRC — infrastructure/repositories/__init__.py
============================================================
Module: infrastructure.repositories (Public Export Surface)

Responsibilities:
  - Exponer los repositorios concretos (Users / Forms / Submissions).
  - Mantener una API estable para container.py y los tests.

Collaborators:
  - infrastructure.store (DocumentStore: Firestore / in-memory)

Policy:
  - Este archivo NO contiene lógica de negocio.
  - Solo re-exporta símbolos; no debe tener side effects.
============================================================
"""

from .form_repository import StoreFormRepository
from .submission_repository import StoreSubmissionRepository
from .user_repository import StoreUserRepository

__all__ = [
    "StoreFormRepository",
    "StoreSubmissionRepository",
    "StoreUserRepository",
]
