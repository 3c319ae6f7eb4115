"""
===============================================================================
TARJETA CRC — app/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (store, repositorios, identity provider, gateway,
    casos de uso) siguiendo DIP.
  - Exponer factories para FastAPI (Depends) y para scripts.
  - Mantener singletons con caching (lru_cache): un solo cliente de
    Firestore / Firebase Admin por proceso.
  - Centralizar decisiones runtime basadas en Settings (config).

Colaboradores:
  - app.crosscutting.config.get_settings
  - app.domain.repositories.* / app.domain.services.* (puertos)
  - app.infrastructure.* (implementaciones)
  - app.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO debe depender de FastAPI (solo expone factories).
  - reset_container() limpia los singletons (tests).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    CreateFormUseCase,
    CreateSubmissionUseCase,
    CreateUserUseCase,
    DeactivateFormUseCase,
    DeactivateUserUseCase,
    DeleteFormUseCase,
    DeleteSubmissionUseCase,
    GetFormUseCase,
    GetSubmissionUseCase,
    GetUserUseCase,
    ListFormsUseCase,
    ListSubmissionsUseCase,
    ListUsersUseCase,
    SubmissionStatisticsUseCase,
    UpdateFormUseCase,
    UpdateSubmissionUseCase,
    UpdateUserUseCase,
)
from .crosscutting.config import get_settings
from .domain.access_policy import SubmissionDeletePolicy
from .domain.repositories import (
    DocumentStore,
    FormRepository,
    SubmissionRepository,
    UserRepository,
)
from .domain.services import IdentityProvider
from .identity.gateway import IdentityGateway
from .infrastructure.firebase import get_firebase_app, get_firestore_client
from .infrastructure.repositories import (
    StoreFormRepository,
    StoreSubmissionRepository,
    StoreUserRepository,
)
from .infrastructure.services import FirebaseIdentityProvider, JwtIdentityProvider
from .infrastructure.store import FirestoreDocumentStore, InMemoryDocumentStore

# =============================================================================
# Helpers internos
# =============================================================================


def _is_test_env() -> bool:
    """
    Determina si estamos en entorno de test.

    Regla:
      - app_env ∈ {"test", "testing", "ci"} => se favorecen adapters locales.
    """
    return get_settings().is_test()


# =============================================================================
# Colaboradores externos (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_document_store() -> DocumentStore:
    """Store de documentos (in-memory en test / STORE_BACKEND=memory; Firestore en runtime)."""
    if _is_test_env() or get_settings().store_backend == "memory":
        return InMemoryDocumentStore()
    return FirestoreDocumentStore(get_firestore_client())


@lru_cache(maxsize=1)
def get_identity_provider() -> IdentityProvider:
    """Identity provider (JWT local en test / IDENTITY_BACKEND=jwt; Firebase Auth en runtime)."""
    settings = get_settings()
    if _is_test_env() or settings.identity_backend == "jwt":
        return JwtIdentityProvider(
            settings.jwt_secret,
            access_ttl_minutes=settings.jwt_access_ttl_minutes,
        )
    return FirebaseIdentityProvider(get_firebase_app())


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    return StoreUserRepository(get_document_store())


@lru_cache(maxsize=1)
def get_form_repository() -> FormRepository:
    return StoreFormRepository(get_document_store())


@lru_cache(maxsize=1)
def get_submission_repository() -> SubmissionRepository:
    return StoreSubmissionRepository(get_document_store())


@lru_cache(maxsize=1)
def get_identity_gateway() -> IdentityGateway:
    return IdentityGateway(get_identity_provider(), get_user_repository())


def get_submission_delete_policy() -> SubmissionDeletePolicy:
    return SubmissionDeletePolicy(get_settings().submission_delete_policy)


# =============================================================================
# Use cases: Users
# =============================================================================


def get_create_user_use_case() -> CreateUserUseCase:
    return CreateUserUseCase(get_user_repository(), get_identity_provider())


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(get_user_repository())


def get_get_user_use_case() -> GetUserUseCase:
    return GetUserUseCase(get_user_repository())


def get_update_user_use_case() -> UpdateUserUseCase:
    return UpdateUserUseCase(get_user_repository())


def get_deactivate_user_use_case() -> DeactivateUserUseCase:
    return DeactivateUserUseCase(get_user_repository(), get_identity_provider())


# =============================================================================
# Use cases: Forms
# =============================================================================


def get_create_form_use_case() -> CreateFormUseCase:
    return CreateFormUseCase(get_form_repository())


def get_list_forms_use_case() -> ListFormsUseCase:
    return ListFormsUseCase(get_form_repository())


def get_get_form_use_case() -> GetFormUseCase:
    return GetFormUseCase(get_form_repository())


def get_update_form_use_case() -> UpdateFormUseCase:
    return UpdateFormUseCase(get_form_repository())


def get_deactivate_form_use_case() -> DeactivateFormUseCase:
    return DeactivateFormUseCase(get_form_repository())


def get_delete_form_use_case() -> DeleteFormUseCase:
    return DeleteFormUseCase(get_form_repository())


# =============================================================================
# Use cases: Submissions
# =============================================================================


def get_create_submission_use_case() -> CreateSubmissionUseCase:
    return CreateSubmissionUseCase(get_submission_repository(), get_form_repository())


def get_list_submissions_use_case() -> ListSubmissionsUseCase:
    return ListSubmissionsUseCase(get_submission_repository())


def get_get_submission_use_case() -> GetSubmissionUseCase:
    return GetSubmissionUseCase(get_submission_repository())


def get_update_submission_use_case() -> UpdateSubmissionUseCase:
    return UpdateSubmissionUseCase(get_submission_repository())


def get_delete_submission_use_case() -> DeleteSubmissionUseCase:
    return DeleteSubmissionUseCase(
        get_submission_repository(), get_submission_delete_policy()
    )


def get_submission_statistics_use_case() -> SubmissionStatisticsUseCase:
    return SubmissionStatisticsUseCase(get_submission_repository())


# =============================================================================
# Tests
# =============================================================================


def reset_container() -> None:
    """Limpia singletons (store en memoria incluido)."""
    for factory in (
        get_document_store,
        get_identity_provider,
        get_user_repository,
        get_form_repository,
        get_submission_repository,
        get_identity_gateway,
    ):
        factory.cache_clear()
