"""
===============================================================================
TARJETA CRC — domain/access_policy.py
===============================================================================

Módulo:
    Política de Acceso (usuarios / formularios / trámites)

Responsabilidades:
    - Decidir, de forma pura (sin I/O, sin FastAPI), si un perfil puede
      ejecutar una operación sobre un recurso.
    - Devolver Allow, AllowFiltered(scope) o Deny(reason).
    - Ser el ÚNICO lugar donde se comparan roles: los casos de uso consultan
      evaluate() y nunca preguntan "¿es admin?".

Colaboradores:
    - identity.users.AuthorizationProfile, UserRole
    - domain.value_objects.AccessScope (campos forzados)
    - application/usecases/*: consultan evaluate() antes de persistir.

Reglas (precedencia, gana la primera que aplica):
    1. superadmin => Allow (todo).
    2. USER: solo lectura del propio perfil; el resto Deny.
    3. admin sin municipio => Deny, salvo la vista pública de formularios
       (nunca se emite un scope de admin con municipality None).
    4. FORM: admin acotado a su municipio; usuario/anónimo solo lee activos.
    5. SUBMISSION: admin acotado a su municipio; usuario a sus trámites;
       borrado permanente según SubmissionDeletePolicy.
    6. Sin regla => Deny("no applicable policy").

Notas:
    - ResourceTarget con municipality/owner_id/active en None significa
      "desconocido" (pre-chequeo antes de leer el recurso). Con atributos
      desconocidos la policy no puede detectar mismatch: el caso de uso
      re-evalúa luego de cargar el recurso.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from ..identity.users import AuthorizationProfile, UserRole
from .value_objects import AccessScope


class Operation(str, Enum):
    CREATE = "create"
    READ = "read"
    LIST = "list"
    UPDATE = "update"
    SOFT_DELETE = "soft_delete"
    HARD_DELETE = "hard_delete"
    STATISTICS = "statistics"


class ResourceKind(str, Enum):
    USER = "user"
    FORM = "form"
    SUBMISSION = "submission"


class SubmissionDeletePolicy(str, Enum):
    """
    Quién puede borrar permanentemente un trámite.

    - ANY: cualquier caller autenticado dentro de su propio scope
      (admin: su municipio; usuario: sus trámites).
    - STAFF: admin de su municipio (y superadmin).
    - SUPERADMIN: solo superadmin (simétrico con formularios).
    """

    ANY = "any"
    STAFF = "staff"
    SUPERADMIN = "superadmin"


@dataclass(frozen=True, slots=True)
class ResourceTarget:
    """Recurso objetivo de la decisión (atributos None => desconocidos)."""

    kind: ResourceKind
    municipality: str | None = None
    owner_id: str | None = None
    active: bool | None = None


@dataclass(frozen=True, slots=True)
class Allow:
    """Permitido sin restricciones adicionales."""

    @property
    def allowed(self) -> bool:
        return True

    @property
    def scope(self) -> AccessScope | None:
        return None


@dataclass(frozen=True, slots=True)
class AllowFiltered:
    """Permitido, con campos forzados por el perfil del caller."""

    forced: AccessScope

    @property
    def allowed(self) -> bool:
        return True

    @property
    def scope(self) -> AccessScope | None:
        return self.forced


@dataclass(frozen=True, slots=True)
class Deny:
    """Denegado (reason es para logs/tests, no para exponer al cliente)."""

    reason: str

    @property
    def allowed(self) -> bool:
        return False

    @property
    def scope(self) -> AccessScope | None:
        return None


Decision = Union[Allow, AllowFiltered, Deny]

ALLOW = Allow()
NO_APPLICABLE_POLICY = "no applicable policy"
ADMIN_WITHOUT_MUNICIPALITY = "admin sin municipio"


# =============================================================================
# Helpers privados
# =============================================================================


def _municipality_mismatch(profile: AuthorizationProfile, target: ResourceTarget) -> bool:
    return (
        target.municipality is not None
        and target.municipality != profile.municipality
    )


def _owner_mismatch(profile: AuthorizationProfile, target: ResourceTarget) -> bool:
    return target.owner_id is not None and target.owner_id != profile.subject_id


def _is_unscoped_admin(profile: AuthorizationProfile) -> bool:
    return profile.role == UserRole.ADMIN and not profile.municipality


def _admin_scope(profile: AuthorizationProfile) -> AllowFiltered:
    return AllowFiltered(AccessScope(municipality=profile.municipality))


def _own_submissions_scope(profile: AuthorizationProfile) -> AllowFiltered:
    return AllowFiltered(AccessScope(submitter_id=profile.subject_id))


# =============================================================================
# Reglas por recurso
# =============================================================================


def _evaluate_user(
    profile: AuthorizationProfile, operation: Operation, target: ResourceTarget
) -> Decision:
    if (
        operation == Operation.READ
        and not profile.is_anonymous
        and target.owner_id is not None
        and target.owner_id == profile.subject_id
    ):
        return ALLOW
    return Deny("solo superadmin gestiona usuarios")


def _evaluate_public_form(operation: Operation, target: ResourceTarget) -> Decision:
    if operation == Operation.LIST:
        return AllowFiltered(AccessScope(active_only=True))
    if target.active is False:
        return Deny("formulario inactivo")
    return ALLOW


def _evaluate_form(
    profile: AuthorizationProfile, operation: Operation, target: ResourceTarget
) -> Decision:
    is_admin = profile.role == UserRole.ADMIN

    if operation == Operation.CREATE:
        if is_admin:
            return _admin_scope(profile)
        return Deny("solo staff crea formularios")

    if operation == Operation.LIST:
        if is_admin:
            return _admin_scope(profile)
        return _evaluate_public_form(operation, target)

    if operation == Operation.READ:
        if is_admin:
            if _municipality_mismatch(profile, target):
                return Deny("formulario de otro municipio")
            return _admin_scope(profile)
        return _evaluate_public_form(operation, target)

    if operation in (Operation.UPDATE, Operation.SOFT_DELETE):
        if not is_admin:
            return Deny("solo staff modifica formularios")
        if _municipality_mismatch(profile, target):
            return Deny("formulario de otro municipio")
        return _admin_scope(profile)

    if operation == Operation.HARD_DELETE:
        return Deny("solo superadmin elimina formularios permanentemente")

    return Deny(NO_APPLICABLE_POLICY)


def _evaluate_submission_delete(
    profile: AuthorizationProfile,
    target: ResourceTarget,
    delete_policy: SubmissionDeletePolicy,
) -> Decision:
    if delete_policy == SubmissionDeletePolicy.SUPERADMIN:
        return Deny("solo superadmin elimina trámites")

    if profile.role == UserRole.ADMIN:
        if _municipality_mismatch(profile, target):
            return Deny("trámite de otro municipio")
        return _admin_scope(profile)

    if delete_policy == SubmissionDeletePolicy.STAFF:
        return Deny("solo staff elimina trámites")

    if _owner_mismatch(profile, target):
        return Deny("trámite de otro usuario")
    return _own_submissions_scope(profile)


def _evaluate_submission(
    profile: AuthorizationProfile,
    operation: Operation,
    target: ResourceTarget,
    delete_policy: SubmissionDeletePolicy,
) -> Decision:
    if profile.is_anonymous:
        return Deny("autenticación requerida")

    is_admin = profile.role == UserRole.ADMIN

    if operation == Operation.CREATE:
        return _own_submissions_scope(profile)

    if operation in (Operation.LIST, Operation.READ):
        if is_admin:
            if _municipality_mismatch(profile, target):
                return Deny("trámite de otro municipio")
            return _admin_scope(profile)
        if _owner_mismatch(profile, target):
            return Deny("trámite de otro usuario")
        return _own_submissions_scope(profile)

    if operation == Operation.UPDATE:
        if not is_admin:
            return Deny("solo staff actualiza trámites")
        if _municipality_mismatch(profile, target):
            return Deny("trámite de otro municipio")
        return _admin_scope(profile)

    if operation == Operation.HARD_DELETE:
        return _evaluate_submission_delete(profile, target, delete_policy)

    if operation == Operation.STATISTICS:
        if is_admin:
            return _admin_scope(profile)
        return Deny("solo staff consulta estadísticas")

    return Deny(NO_APPLICABLE_POLICY)


# =============================================================================
# API pública
# =============================================================================


def evaluate(
    profile: AuthorizationProfile,
    operation: Operation,
    target: ResourceTarget,
    *,
    submission_delete_policy: SubmissionDeletePolicy = SubmissionDeletePolicy.ANY,
) -> Decision:
    """Evalúa perfil × operación × recurso y devuelve la decisión."""
    if profile.role == UserRole.SUPERADMIN and not profile.is_anonymous:
        return ALLOW

    if target.kind == ResourceKind.USER:
        return _evaluate_user(profile, operation, target)

    if _is_unscoped_admin(profile):
        # Sin municipio no hay scope que forzar: solo la vista pública de formularios.
        if target.kind == ResourceKind.FORM and operation in (Operation.LIST, Operation.READ):
            return _evaluate_public_form(operation, target)
        return Deny(ADMIN_WITHOUT_MUNICIPALITY)

    if target.kind == ResourceKind.FORM:
        return _evaluate_form(profile, operation, target)

    if target.kind == ResourceKind.SUBMISSION:
        return _evaluate_submission(
            profile, operation, target, submission_delete_policy
        )

    return Deny(NO_APPLICABLE_POLICY)
