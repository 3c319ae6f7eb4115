"""
Name: Superadmin Bootstrap Script

Responsibilities:
  - Create the first superadmin (idempotent by email)
  - Create the account in the configured identity provider (Firebase Auth)
  - Store the `usuarios/{uid}` record in the configured document store
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import os
import sys
from datetime import datetime, timezone

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from app.container import get_identity_provider, get_user_repository  # noqa: E402
from app.crosscutting.config import get_settings  # noqa: E402
from app.domain.services import AccountExistsError  # noqa: E402
from app.identity.users import User, UserRole  # noqa: E402

MIN_NAME_CHARS = 3


def _prompt_email() -> str:
    email = input("Email: ").strip().lower()
    if not email:
        raise SystemExit("Email is required.")
    return email


def _prompt_password(min_chars: int) -> str:
    password = getpass.getpass("Password: ")
    if len(password) < min_chars:
        raise SystemExit(f"Password must have at least {min_chars} characters.")
    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        raise SystemExit("Passwords do not match.")
    return password


def _parse_args() -> argparse.Namespace:
    argv = sys.argv[1:]
    if argv and argv[0] == "--":
        argv = argv[1:]
    parser = argparse.ArgumentParser(
        description="Create the first superadmin user (idempotent)."
    )
    parser.add_argument("--email", help="User email (will be normalized)")
    parser.add_argument(
        "--password",
        help="User password (omit to be prompted securely)",
    )
    parser.add_argument(
        "--name",
        default="Superadmin",
        help="Display name (default: Superadmin)",
    )
    return parser.parse_args(argv)


def _normalize_email(email: str) -> str:
    normalized = email.strip().lower()
    if not normalized:
        raise SystemExit("Email is required.")
    return normalized


async def _maybe_create_superadmin(email: str, password: str, name: str) -> None:
    users = get_user_repository()
    existing = await users.get_user_by_email(email)
    if existing:
        print(
            "User already exists: "
            f"uid={existing.subject_id} email={email} role={existing.role.value} "
            f"active={existing.active}"
        )
        return

    try:
        subject_id = await get_identity_provider().create_account(
            email=email, password=password, display_name=name
        )
    except AccountExistsError:
        raise SystemExit(
            f"An identity account already exists for {email} but has no user record."
        )

    await users.create_user(
        User(
            subject_id=subject_id,
            email=email,
            display_name=name,
            role=UserRole.SUPERADMIN,
            active=True,
            created_at=datetime.now(timezone.utc),
        )
    )
    print(f"Created user: uid={subject_id} email={email} role={UserRole.SUPERADMIN.value}")


def main() -> None:
    args = _parse_args()
    settings = get_settings()
    if settings.identity_backend != "firebase" or settings.store_backend != "firestore":
        raise SystemExit(
            "IDENTITY_BACKEND=firebase and STORE_BACKEND=firestore are required "
            "(local backends do not persist across processes)."
        )

    name = args.name.strip()
    if len(name) < MIN_NAME_CHARS:
        raise SystemExit(f"Name must have at least {MIN_NAME_CHARS} characters.")

    email = _normalize_email(args.email) if args.email else _prompt_email()
    password = args.password or _prompt_password(settings.min_password_chars)
    asyncio.run(_maybe_create_superadmin(email, password, name))


if __name__ == "__main__":
    main()
