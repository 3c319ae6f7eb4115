"""
===============================================================================
TARJETA CRC — app/interfaces/api/http/routers/__init__.py
===============================================================================

Name:
    Routers Package (HTTP)

Responsibilities:
    - Exponer routers segmentados por recurso para el router raíz.

Collaborators:
    - routers.users (auth + gestión de usuarios)
    - routers.forms
    - routers.submissions

Notas:
    - Este archivo NO define endpoints. Solo re-exporta routers.
===============================================================================
"""

from .forms import router as forms_router
from .submissions import router as submissions_router
from .users import router as users_router

__all__ = [
    "forms_router",
    "submissions_router",
    "users_router",
]
