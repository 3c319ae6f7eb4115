"""
Name: Identity Gateway Tests

Responsibilities:
  - Bearer extraction
  - Failure kinds (unauthenticated / expired / invalid / inactive / not found)
  - Optional authentication falls back to ANONYMOUS
  - Credential exchange records last access (best-effort)
"""

from datetime import datetime, timezone

import pytest

from app.crosscutting.exceptions import StoreError
from app.domain.services import TokenExpiredError, TokenInvalidError, VerifiedIdentity
from app.identity.gateway import (
    AuthenticationError,
    AuthFailure,
    IdentityGateway,
    extract_bearer_token,
)
from app.identity.users import ANONYMOUS, UserRole

from conftest import MUNICIPALITY_A, make_user

pytestmark = pytest.mark.unit

NOW = datetime(2030, 5, 1, 12, 0, tzinfo=timezone.utc)


class FakeIdentityProvider:
    """token -> subject; 'expired' / 'garbage' simulate failures."""

    def __init__(self, tokens: dict[str, str] | None = None):
        self._tokens = tokens or {}

    async def verify_token(self, token: str) -> VerifiedIdentity:
        if token == "expired":
            raise TokenExpiredError("expired")
        if token not in self._tokens:
            raise TokenInvalidError("invalid")
        return VerifiedIdentity(subject_id=self._tokens[token])

    async def create_account(self, *, email, password, display_name) -> str:
        raise NotImplementedError

    async def disable_account(self, subject_id: str) -> None:
        raise NotImplementedError


class FakeUserRepository:
    def __init__(self, users=(), *, fail_last_access: bool = False):
        self.users = {u.subject_id: u for u in users}
        self.fail_last_access = fail_last_access
        self.last_access: dict[str, datetime] = {}

    async def get_user(self, subject_id):
        return self.users.get(subject_id)

    async def record_last_access(self, subject_id, at):
        if self.fail_last_access:
            raise StoreError("firestore caído")
        self.last_access[subject_id] = at


def _gateway(users=(), **repo_kwargs) -> tuple[IdentityGateway, FakeUserRepository]:
    repo = FakeUserRepository(users, **repo_kwargs)
    provider = FakeIdentityProvider(
        {"tok-admin": "admin-a", "tok-off": "inactivo", "tok-ghost": "fantasma"}
    )
    return IdentityGateway(provider, repo, clock=lambda: NOW), repo


USERS = [
    make_user("admin-a", UserRole.ADMIN, municipality=MUNICIPALITY_A),
    make_user("inactivo", active=False),
]


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Bearer abc", "abc"),
        ("bearer abc", "abc"),
        ("  Bearer   abc  ", "abc"),
        ("Basic abc", None),
        ("Bearer", None),
        ("Bearer   ", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


@pytest.mark.asyncio
async def test_authenticate_builds_profile_from_record():
    gateway, _ = _gateway(USERS)

    profile = await gateway.authenticate("Bearer tok-admin")

    assert profile.subject_id == "admin-a"
    assert profile.role == UserRole.ADMIN
    assert profile.municipality == MUNICIPALITY_A
    assert not profile.is_anonymous


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "header, kind",
    [
        (None, AuthFailure.UNAUTHENTICATED),
        ("Token tok-admin", AuthFailure.UNAUTHENTICATED),
        ("Bearer expired", AuthFailure.TOKEN_EXPIRED),
        ("Bearer garbage", AuthFailure.TOKEN_INVALID),
        ("Bearer tok-off", AuthFailure.ACCOUNT_INACTIVE),
        ("Bearer tok-ghost", AuthFailure.ACCOUNT_NOT_FOUND),
    ],
)
async def test_authenticate_failure_kinds(header, kind):
    gateway, _ = _gateway(USERS)

    with pytest.raises(AuthenticationError) as excinfo:
        await gateway.authenticate(header)

    assert excinfo.value.kind == kind
    assert excinfo.value.message


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "header", [None, "Bearer expired", "Bearer garbage", "Bearer tok-off", "Bearer tok-ghost"]
)
async def test_authenticate_optional_never_fails(header):
    gateway, _ = _gateway(USERS)
    assert await gateway.authenticate_optional(header) is ANONYMOUS


@pytest.mark.asyncio
async def test_authenticate_optional_propagates_store_outage():
    class BrokenRepo(FakeUserRepository):
        async def get_user(self, subject_id):
            raise StoreError("firestore caído")

    gateway = IdentityGateway(FakeIdentityProvider({"t": "x"}), BrokenRepo())

    with pytest.raises(StoreError):
        await gateway.authenticate_optional("Bearer t")


@pytest.mark.asyncio
async def test_exchange_records_last_access():
    gateway, repo = _gateway(USERS)

    user = await gateway.exchange("Bearer tok-admin")

    assert user.last_access_at == NOW
    assert repo.last_access == {"admin-a": NOW}


@pytest.mark.asyncio
async def test_exchange_swallows_last_access_failure():
    gateway, repo = _gateway(USERS, fail_last_access=True)

    user = await gateway.exchange("Bearer tok-admin")

    assert user.subject_id == "admin-a"
    assert user.last_access_at is None


@pytest.mark.asyncio
async def test_exchange_rejects_inactive_account_without_writing():
    gateway, repo = _gateway(USERS)

    with pytest.raises(AuthenticationError) as excinfo:
        await gateway.exchange("Bearer tok-off")

    assert excinfo.value.kind == AuthFailure.ACCOUNT_INACTIVE
    assert repo.last_access == {}
