# =============================================================================
# FILE: application/bootstrap_superadmin.py
# =============================================================================
"""
===============================================================================
TASK: Bootstrap Superadmin (Local-only)
===============================================================================

Qué es:
    Asegura que exista el registro `usuarios/{uid}` de un superadmin para
    desarrollo local. La cuenta del identity provider debe existir (Firebase)
    o se asume (JWT local: cualquier uid sirve como subject).

Seguridad:
    - Guard estricto: solo corre con app_env == "local".
    - En producción Settings ya rechaza BOOTSTRAP_SUPERADMIN=true.

CRC:
    Component: ensure_bootstrap_superadmin
    Responsibilities:
      - Validar guard de ambiente
      - Crear el registro si falta (idempotente)
      - Nunca pisar un registro existente (solo loguea)
    Collaborators:
      - UserRepository
      - Settings
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.repositories import UserRepository
from ..identity.users import User, UserRole


def _assert_allowed_environment(settings: Settings) -> None:
    env = (settings.app_env or "").strip().lower()
    if env != "local":
        raise RuntimeError(
            f"FATAL: BOOTSTRAP_SUPERADMIN is enabled but ENV is '{env}' (must be 'local'). "
            "Safety guard prevents accidental privilege grants."
        )


async def ensure_bootstrap_superadmin(
    settings: Settings, *, user_repo: UserRepository
) -> User | None:
    """
    Ensure the configured superadmin record exists.

    Returns the created user, or None when disabled / already present.
    """
    if not settings.bootstrap_superadmin:
        return None

    _assert_allowed_environment(settings)

    subject_id = (settings.bootstrap_superadmin_uid or "").strip()
    email = (settings.bootstrap_superadmin_email or "").strip().lower()
    if not subject_id or not email:
        raise ValueError("Bootstrap superadmin is enabled but uid/email are empty")

    existing = await user_repo.get_user(subject_id)
    if existing is not None:
        if existing.role != UserRole.SUPERADMIN or not existing.active:
            logger.warning(
                "Bootstrap superadmin: record exists with another role or inactive; skipping",
                extra={"subject_id": subject_id, "role": existing.role.value},
            )
        else:
            logger.info(
                "Bootstrap superadmin: record exists; skipping",
                extra={"subject_id": subject_id},
            )
        return None

    user = User(
        subject_id=subject_id,
        email=email,
        display_name=settings.bootstrap_superadmin_name.strip() or "Superadmin",
        role=UserRole.SUPERADMIN,
        municipality=None,
        active=True,
        created_at=datetime.now(timezone.utc),
    )
    created = await user_repo.create_user(user)
    logger.info(
        "Bootstrap superadmin: record created",
        extra={"subject_id": subject_id, "email": email},
    )
    return created
