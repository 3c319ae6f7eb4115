"""
===============================================================================
FORM ACCESS HELPERS
===============================================================================

Responsibilities:
    - Construir el ResourceTarget de un formulario ya cargado, para la
      segunda evaluación (target-aware) de la policy.

Collaborators:
    - domain.access_policy.ResourceTarget
    - usecases.forms.* y usecases.submissions.create_submission
===============================================================================
"""

from __future__ import annotations

from ....domain.access_policy import ResourceKind, ResourceTarget
from ....domain.entities import Form

# Pre-chequeo por rol: atributos desconocidos antes de leer el store.
FORM_ROLE_TARGET = ResourceTarget(ResourceKind.FORM)


def form_target(form: Form) -> ResourceTarget:
    return ResourceTarget(
        ResourceKind.FORM,
        municipality=form.municipality,
        owner_id=form.created_by,
        active=form.active,
    )
