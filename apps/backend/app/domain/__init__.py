"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.
    - Mantener estable el "surface area" del dominio.

Colaboradores:
    - domain.entities: Form, FieldSpec, Submission, ...
    - domain.access_policy: evaluate() y decisiones
    - domain.repositories: puertos de persistencia
    - domain.services: puerto del identity provider
    - domain.value_objects: filtros cerrados y scope

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .access_policy import (
    Allow,
    AllowFiltered,
    Decision,
    Deny,
    Operation,
    ResourceKind,
    ResourceTarget,
    SubmissionDeletePolicy,
    evaluate,
)
from .entities import (
    FieldKind,
    FieldSpec,
    Form,
    Submission,
    SubmissionStatistics,
    SubmissionStatus,
)
from .repositories import (
    DocumentStore,
    FormRepository,
    OrderBy,
    RecordNotFoundError,
    SortDirection,
    SubmissionRepository,
    UserRepository,
)
from .services import (
    AccountExistsError,
    IdentityProvider,
    TokenExpiredError,
    TokenInvalidError,
    VerifiedIdentity,
)
from .value_objects import (
    AccessScope,
    FormFilter,
    SubmissionFilter,
    UserFilter,
    apply_scope,
)

__all__ = [
    # Entities
    "FieldKind",
    "FieldSpec",
    "Form",
    "Submission",
    "SubmissionStatistics",
    "SubmissionStatus",
    # Access policy
    "Allow",
    "AllowFiltered",
    "Decision",
    "Deny",
    "Operation",
    "ResourceKind",
    "ResourceTarget",
    "SubmissionDeletePolicy",
    "evaluate",
    # Repository Interfaces (Ports)
    "DocumentStore",
    "FormRepository",
    "OrderBy",
    "RecordNotFoundError",
    "SortDirection",
    "SubmissionRepository",
    "UserRepository",
    # Service Interfaces (Ports)
    "AccountExistsError",
    "IdentityProvider",
    "TokenExpiredError",
    "TokenInvalidError",
    "VerifiedIdentity",
    # Value Objects
    "AccessScope",
    "FormFilter",
    "SubmissionFilter",
    "UserFilter",
    "apply_scope",
]
