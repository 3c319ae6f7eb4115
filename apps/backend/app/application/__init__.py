"""
===============================================================================
APPLICATION LAYER (Public API / Exports)
===============================================================================

Expone los puntos de entrada estables de la capa de aplicación:
  - usecases/: Users / Forms / Submissions (importar desde los subpaquetes)
  - ensure_bootstrap_superadmin: alta del primer superadmin (local)
===============================================================================
"""

from .bootstrap_superadmin import ensure_bootstrap_superadmin

__all__ = ["ensure_bootstrap_superadmin"]
