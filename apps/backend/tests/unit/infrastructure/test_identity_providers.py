"""
Name: Identity Provider Adapter Tests

Responsibilities:
  - JwtIdentityProvider: issue/verify, expiry, tampering, account registry
  - FirebaseIdentityProvider: SDK error translation (SDK calls monkeypatched)
"""

from datetime import timedelta
from types import SimpleNamespace

import jwt
import pytest
from firebase_admin import auth as firebase_auth

from app.crosscutting.exceptions import IdentityProviderError
from app.domain.services import AccountExistsError, TokenExpiredError, TokenInvalidError
from app.infrastructure.services import firebase_identity
from app.infrastructure.services.firebase_identity import FirebaseIdentityProvider
from app.infrastructure.services.jwt_identity import JwtIdentityProvider

pytestmark = pytest.mark.unit

SECRET = "unit-secret"


# =============================================================================
# JWT (local)
# =============================================================================


@pytest.mark.asyncio
async def test_jwt_round_trip_returns_subject_and_email():
    provider = JwtIdentityProvider(SECRET)
    token = provider.issue_token("uid-1", email="ana@example.com")

    identity = await provider.verify_token(token)

    assert identity.subject_id == "uid-1"
    assert identity.email == "ana@example.com"


@pytest.mark.asyncio
async def test_jwt_expired_token():
    provider = JwtIdentityProvider(SECRET)
    token = provider.issue_token("uid-1", ttl=timedelta(minutes=-5))

    with pytest.raises(TokenExpiredError):
        await provider.verify_token(token)


@pytest.mark.asyncio
async def test_jwt_token_signed_with_other_secret_is_invalid():
    token = JwtIdentityProvider("otro-secreto").issue_token("uid-1")

    with pytest.raises(TokenInvalidError):
        await JwtIdentityProvider(SECRET).verify_token(token)


@pytest.mark.asyncio
async def test_jwt_rejects_wrong_token_type_and_garbage():
    provider = JwtIdentityProvider(SECRET)
    refresh = jwt.encode(
        {"sub": "uid-1", "exp": 4102444800, "typ": "refresh"}, SECRET, algorithm="HS256"
    )

    with pytest.raises(TokenInvalidError):
        await provider.verify_token(refresh)
    with pytest.raises(TokenInvalidError):
        await provider.verify_token("no-es-un-jwt")


@pytest.mark.asyncio
async def test_jwt_create_account_rejects_duplicate_email_case_insensitive():
    provider = JwtIdentityProvider(SECRET)

    subject_id = await provider.create_account(
        email="ana@example.com", password="secreto", display_name="Ana"
    )
    assert subject_id

    with pytest.raises(AccountExistsError):
        await provider.create_account(
            email="ANA@example.com", password="secreto", display_name="Ana"
        )


@pytest.mark.asyncio
async def test_jwt_disabled_account_fails_verification():
    provider = JwtIdentityProvider(SECRET)
    token = provider.issue_token("uid-1")

    await provider.disable_account("uid-1")

    with pytest.raises(TokenInvalidError):
        await provider.verify_token(token)


def test_jwt_requires_secret():
    with pytest.raises(ValueError):
        JwtIdentityProvider("")


# =============================================================================
# Firebase (SDK monkeypatched)
# =============================================================================


def _raiser(exc):
    def _call(*args, **kwargs):
        raise exc

    return _call


@pytest.mark.asyncio
async def test_firebase_verify_maps_claims(monkeypatch):
    monkeypatch.setattr(
        firebase_identity.auth,
        "verify_id_token",
        lambda token, app: {"uid": "fb-1", "email": "a@b.com"},
    )

    identity = await FirebaseIdentityProvider(app=None).verify_token("tok")

    assert identity.subject_id == "fb-1"
    assert identity.email == "a@b.com"


@pytest.mark.asyncio
async def test_firebase_expired_token(monkeypatch):
    monkeypatch.setattr(
        firebase_identity.auth,
        "verify_id_token",
        _raiser(firebase_auth.ExpiredIdTokenError("expired", cause=None)),
    )

    with pytest.raises(TokenExpiredError):
        await FirebaseIdentityProvider(app=None).verify_token("tok")


@pytest.mark.asyncio
async def test_firebase_malformed_token_is_invalid(monkeypatch):
    monkeypatch.setattr(
        firebase_identity.auth, "verify_id_token", _raiser(ValueError("malformed"))
    )

    with pytest.raises(TokenInvalidError):
        await FirebaseIdentityProvider(app=None).verify_token("tok")


@pytest.mark.asyncio
async def test_firebase_create_account_returns_uid(monkeypatch):
    monkeypatch.setattr(
        firebase_identity.auth,
        "create_user",
        lambda **kwargs: SimpleNamespace(uid="fb-new"),
    )

    uid = await FirebaseIdentityProvider(app=None).create_account(
        email="a@b.com", password="secreto", display_name="Ana"
    )

    assert uid == "fb-new"


@pytest.mark.asyncio
async def test_firebase_disable_failure_surfaces(monkeypatch):
    monkeypatch.setattr(
        firebase_identity.auth, "update_user", _raiser(ValueError("uid inválido"))
    )

    with pytest.raises(IdentityProviderError):
        await FirebaseIdentityProvider(app=None).disable_account("fb-1")
