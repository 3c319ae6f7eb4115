"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure the test environment (in-memory store, local JWT identity)
  - Reset container singletons between tests
  - Provide profile / entity factories and API seeding helpers

Collaborators:
  - pytest / pytest-asyncio
  - app.container: singletons shared by the FastAPI app
  - app.infrastructure.store.InMemoryDocumentStore

Notes:
  - Env vars are set BEFORE importing app modules (Settings is cached)
  - Use the `api` fixture for TestClient tests; it seeds through the container
"""

import asyncio
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("IDENTITY_BACKEND", "jwt")
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")

from app.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from app import container  # noqa: E402
from app.domain.entities import (  # noqa: E402
    FieldKind,
    FieldSpec,
    Form,
    Submission,
    SubmissionStatus,
)
from app.identity.users import AuthorizationProfile, User, UserRole  # noqa: E402
from app.infrastructure.repositories import (  # noqa: E402
    StoreFormRepository,
    StoreSubmissionRepository,
    StoreUserRepository,
)
from app.infrastructure.store import InMemoryDocumentStore  # noqa: E402

MUNICIPALITY_A = "San Isidro"
MUNICIPALITY_B = "Tigre"


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _fresh_container():
    container.reset_container()
    yield
    container.reset_container()


# ============================================================================
# Profiles
# ============================================================================


def make_profile(
    role: UserRole,
    *,
    subject_id: str | None = None,
    municipality: str | None = None,
    display_name: str = "",
) -> AuthorizationProfile:
    return AuthorizationProfile(
        subject_id=subject_id or f"{role.value}-1",
        role=role,
        municipality=municipality,
        display_name=display_name or role.value.title(),
    )


@pytest.fixture
def superadmin() -> AuthorizationProfile:
    return make_profile(UserRole.SUPERADMIN, subject_id="root")


@pytest.fixture
def admin_a() -> AuthorizationProfile:
    return make_profile(UserRole.ADMIN, subject_id="admin-a", municipality=MUNICIPALITY_A)


@pytest.fixture
def admin_b() -> AuthorizationProfile:
    return make_profile(UserRole.ADMIN, subject_id="admin-b", municipality=MUNICIPALITY_B)


@pytest.fixture
def citizen() -> AuthorizationProfile:
    return make_profile(UserRole.USER, subject_id="vecino-1", display_name="Ana Vecina")


@pytest.fixture
def other_citizen() -> AuthorizationProfile:
    return make_profile(UserRole.USER, subject_id="vecino-2", display_name="Beto Vecino")


# ============================================================================
# Entity factories
# ============================================================================


def make_user(
    subject_id: str,
    role: UserRole = UserRole.USER,
    *,
    municipality: str | None = None,
    active: bool = True,
    email: str | None = None,
    created_at: datetime | None = None,
) -> User:
    return User(
        subject_id=subject_id,
        email=email or f"{subject_id}@example.com",
        display_name=f"Nombre {subject_id}",
        role=role,
        municipality=municipality,
        active=active,
        created_at=created_at or datetime.now(timezone.utc),
    )


def make_form(
    *,
    municipality: str = MUNICIPALITY_A,
    active: bool = True,
    title: str = "Solicitud de poda",
    created_by: str = "admin-a",
    created_at: datetime | None = None,
) -> Form:
    now = created_at or datetime.now(timezone.utc)
    return Form(
        id="",
        title=title,
        fields=[
            FieldSpec(name="direccion", kind=FieldKind.TEXT, label="Dirección", required=True),
            FieldSpec(name="email", kind=FieldKind.EMAIL, label="Email"),
        ],
        municipality=municipality,
        created_by=created_by,
        description="Pedido de poda de arbolado",
        active=active,
        created_at=now,
        updated_at=now,
    )


def make_submission(
    form: Form,
    *,
    submitter_id: str = "vecino-1",
    status: SubmissionStatus = SubmissionStatus.PENDING,
    created_at: datetime | None = None,
) -> Submission:
    now = created_at or datetime.now(timezone.utc)
    return Submission(
        id="",
        form_id=form.id,
        form_title=form.title,
        municipality=form.municipality,
        submitter_id=submitter_id,
        submitter_name=f"Nombre {submitter_id}",
        answers={"direccion": "Av. Siempreviva 742"},
        status=status,
        comments="",
        created_at=now,
        updated_at=now,
    )


def minutes_ago(minutes: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(minutes=minutes)


# ============================================================================
# Store-backed repositories (in-memory)
# ============================================================================


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def user_repo(store) -> StoreUserRepository:
    return StoreUserRepository(store)


@pytest.fixture
def form_repo(store) -> StoreFormRepository:
    return StoreFormRepository(store)


@pytest.fixture
def submission_repo(store) -> StoreSubmissionRepository:
    return StoreSubmissionRepository(store)


# ============================================================================
# API seeding (TestClient tests)
# ============================================================================


class ApiSeeder:
    """Seeds records through the container singletons the app uses."""

    def add_user(
        self,
        subject_id: str,
        role: UserRole = UserRole.USER,
        *,
        municipality: str | None = None,
        active: bool = True,
    ) -> str:
        user = make_user(subject_id, role, municipality=municipality, active=active)
        asyncio.run(container.get_user_repository().create_user(user))
        return subject_id

    def token(self, subject_id: str, *, ttl: timedelta | None = None) -> str:
        return container.get_identity_provider().issue_token(subject_id, ttl=ttl)

    def auth(self, subject_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token(subject_id)}"}

    def add_form(self, **kwargs) -> Form:
        return asyncio.run(container.get_form_repository().create_form(make_form(**kwargs)))

    def add_submission(self, form: Form, **kwargs) -> Submission:
        return asyncio.run(
            container.get_submission_repository().create_submission(
                make_submission(form, **kwargs)
            )
        )


@pytest.fixture
def seed() -> ApiSeeder:
    return ApiSeeder()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from app.api.main import app

    with TestClient(app) as test_client:
        yield test_client
