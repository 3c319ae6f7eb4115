# =============================================================================
# FILE: domain/value_objects.py
# =============================================================================
"""
===============================================================================
DOMAIN: Value Objects (filtros cerrados por recurso + scope de la policy)
===============================================================================

Qué es:
    Filtros inmutables, uno por tipo de recurso, en lugar de dicts abiertos.
    La policy solo puede forzar los campos que existen acá.

Contenido:
    - AccessScope: campos forzados por la policy (AllowFiltered)
    - FormFilter / SubmissionFilter / UserFilter: filtros de listado
    - apply_scope(): combina filtro del caller + scope forzado

Reglas de combinación:
    - Semántica AND entre campos.
    - Si el scope fuerza un campo, el valor forzado pisa al del caller
      (override silencioso, no es error).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, TypeVar, Union

from ..identity.users import UserRole
from .entities import SubmissionStatus


@dataclass(frozen=True, slots=True)
class AccessScope:
    """
    Campos que la policy fuerza sobre una operación.

    - municipality: municipio del admin
    - submitter_id: subject del usuario (propiedad de trámites)
    - active_only: formularios visibles para no-staff
    """

    municipality: str | None = None
    submitter_id: str | None = None
    active_only: bool = False


@dataclass(frozen=True, slots=True)
class FormFilter:
    municipality: str | None = None
    active: bool | None = None
    created_by: str | None = None

    def to_equalities(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "municipality": self.municipality,
                "active": self.active,
                "created_by": self.created_by,
            }
        )


@dataclass(frozen=True, slots=True)
class SubmissionFilter:
    municipality: str | None = None
    submitter_id: str | None = None
    form_id: str | None = None
    status: SubmissionStatus | None = None

    def to_equalities(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "municipality": self.municipality,
                "submitter_id": self.submitter_id,
                "form_id": self.form_id,
                "status": self.status,
            }
        )


@dataclass(frozen=True, slots=True)
class UserFilter:
    role: UserRole | None = None
    municipality: str | None = None
    active: bool | None = None

    def to_equalities(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "role": self.role,
                "municipality": self.municipality,
                "active": self.active,
            }
        )


ResourceFilter = Union[FormFilter, SubmissionFilter, UserFilter]
F = TypeVar("F", FormFilter, SubmissionFilter, UserFilter)


def _drop_none(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def apply_scope(filters: F, scope: AccessScope | None) -> F:
    """
    Aplica el scope forzado sobre un filtro cerrado.

    Cada variante declara explícitamente qué campos puede forzar la policy.
    """
    if scope is None:
        return filters

    if isinstance(filters, FormFilter):
        forced: Dict[str, Any] = {}
        if scope.municipality is not None:
            forced["municipality"] = scope.municipality
        if scope.active_only:
            forced["active"] = True
        return replace(filters, **forced)

    if isinstance(filters, SubmissionFilter):
        forced = {}
        if scope.municipality is not None:
            forced["municipality"] = scope.municipality
        if scope.submitter_id is not None:
            forced["submitter_id"] = scope.submitter_id
        return replace(filters, **forced)

    if isinstance(filters, UserFilter):
        if scope.municipality is not None:
            return replace(filters, municipality=scope.municipality)
        return filters

    raise TypeError(f"Filtro no soportado: {type(filters).__name__}")
