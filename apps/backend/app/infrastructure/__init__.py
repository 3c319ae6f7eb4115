"""
============================================================
TARJETA CRC — infrastructure/__init__.py
============================================================
Module: infrastructure (Adapters)

Responsibilities:
  - Agrupar adaptadores concretos: Firebase/Firestore, document stores,
    repositorios e identity providers.

Policy:
  - Importar desde los subpaquetes (infrastructure.store,
    infrastructure.repositories, infrastructure.services, ...).
  - Sin side effects al importar.
============================================================
"""
