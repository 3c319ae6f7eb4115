"""
Name: Bootstrap Superadmin Tests

Responsibilities:
  - Local-only guard
  - Idempotent creation of the configured superadmin record
"""

import pytest

from app.application.bootstrap_superadmin import ensure_bootstrap_superadmin
from app.crosscutting.config import Settings
from app.identity.users import UserRole

from conftest import make_user

pytestmark = pytest.mark.unit


def _settings(**overrides) -> Settings:
    values = {
        "app_env": "local",
        "bootstrap_superadmin": True,
        "bootstrap_superadmin_uid": "root-uid",
        "bootstrap_superadmin_email": " Root@Local ",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.mark.asyncio
async def test_disabled_bootstrap_is_noop(user_repo):
    result = await ensure_bootstrap_superadmin(
        _settings(bootstrap_superadmin=False), user_repo=user_repo
    )

    assert result is None
    assert await user_repo.get_user("root-uid") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("env", ["development", "test", "staging"])
async def test_bootstrap_outside_local_fails_fast(user_repo, env):
    with pytest.raises(RuntimeError):
        await ensure_bootstrap_superadmin(_settings(app_env=env), user_repo=user_repo)


@pytest.mark.asyncio
async def test_bootstrap_requires_uid(user_repo):
    with pytest.raises(ValueError):
        await ensure_bootstrap_superadmin(
            _settings(bootstrap_superadmin_uid="  "), user_repo=user_repo
        )


@pytest.mark.asyncio
async def test_bootstrap_creates_superadmin_once(user_repo):
    created = await ensure_bootstrap_superadmin(_settings(), user_repo=user_repo)
    second = await ensure_bootstrap_superadmin(_settings(), user_repo=user_repo)
    stored = await user_repo.get_user("root-uid")

    assert created.subject_id == "root-uid"
    assert second is None
    assert stored.role == UserRole.SUPERADMIN
    assert stored.email == "root@local"
    assert stored.municipality is None
    assert stored.active is True


@pytest.mark.asyncio
async def test_bootstrap_leaves_existing_record_untouched(user_repo):
    await user_repo.create_user(make_user("root-uid", active=False))

    result = await ensure_bootstrap_superadmin(_settings(), user_repo=user_repo)
    stored = await user_repo.get_user("root-uid")

    assert result is None
    assert stored.role == UserRole.USER
    assert stored.active is False
