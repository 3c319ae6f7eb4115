"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Select runtime collaborators (document store, identity provider)

Collaborators:
  - api/main.py: reads settings for CORS and startup validation
  - container.py: reads settings to build the store / identity singletons
  - schemas/*: read settings for request validation limits

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic — pure configuration

Notes:
  - Uses pydantic-settings for env parsing and validation
  - Singleton via lru_cache for performance
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_STORE_BACKENDS = {"firestore", "memory"}
_IDENTITY_BACKENDS = {"firebase", "jwt"}
_SUBMISSION_DELETE_POLICIES = {"any", "staff", "superadmin"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (local/development/test/production)
        allowed_origins: Comma-separated CORS origins
        cors_allow_credentials: Allow cookies cross-origin (default: False)
        log_level: Root level for the JSON logger (default: INFO)
        log_json: Emit JSON lines (default: True)
        max_body_bytes: Max request body size (default: 1MB)
        store_backend: firestore|memory (default: firestore)
        identity_backend: firebase|jwt (default: firebase)
        firebase_project_id: GCP project id (optional, inferred from credentials)
        firebase_credentials_file: Service-account JSON path (optional, ADC otherwise)
        jwt_secret: Secret for HS256 tokens (jwt identity backend only)
        jwt_access_ttl_minutes: Access token TTL in minutes (jwt backend only)
        submission_delete_policy: any|staff|superadmin (default: any)
        max_title_chars / min_title_chars: Form title bounds (3..100)
        max_description_chars: Form description bound (500)
        min_password_chars: Minimum password length on registration (6)
        bootstrap_superadmin: Ensure a superadmin record exists on startup
    """

    # Environment
    app_env: str = "development"

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Security - Hardening
    max_body_bytes: int = 1 * 1024 * 1024  # 1MB

    # Collaborators
    store_backend: str = "firestore"
    identity_backend: str = "firebase"

    # Firebase
    firebase_project_id: str = ""
    firebase_credentials_file: str = ""

    # Security - JWT (local identity backend)
    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = 60

    # Access policy
    submission_delete_policy: str = "any"

    # API limits
    min_title_chars: int = 3
    max_title_chars: int = 100
    max_description_chars: int = 500
    min_name_chars: int = 3
    max_name_chars: int = 100
    min_password_chars: int = 6
    max_form_fields: int = 200

    # Dev Tools (Backend Safe)
    bootstrap_superadmin: bool = False
    bootstrap_superadmin_uid: str = ""
    bootstrap_superadmin_email: str = "superadmin@local"
    bootstrap_superadmin_name: str = "Superadmin"

    @field_validator("store_backend")
    @classmethod
    def store_backend_valid(cls, v: str) -> str:
        backend = (v or "firestore").strip().lower()
        if backend not in _STORE_BACKENDS:
            raise ValueError("store_backend must be firestore or memory")
        return backend

    @field_validator("identity_backend")
    @classmethod
    def identity_backend_valid(cls, v: str) -> str:
        backend = (v or "firebase").strip().lower()
        if backend not in _IDENTITY_BACKENDS:
            raise ValueError("identity_backend must be firebase or jwt")
        return backend

    @field_validator("submission_delete_policy")
    @classmethod
    def submission_delete_policy_valid(cls, v: str) -> str:
        policy = (v or "any").strip().lower()
        if policy not in _SUBMISSION_DELETE_POLICIES:
            raise ValueError(
                "submission_delete_policy must be any, staff, or superadmin"
            )
        return policy

    @field_validator("jwt_access_ttl_minutes")
    @classmethod
    def ttl_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("jwt_access_ttl_minutes must be greater than 0")
        return v

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        if self.identity_backend != "firebase":
            raise ValueError("IDENTITY_BACKEND must be firebase in production")
        if self.store_backend != "firestore":
            raise ValueError("STORE_BACKEND must be firestore in production")
        if self.bootstrap_superadmin:
            raise ValueError("BOOTSTRAP_SUPERADMIN is not allowed in production")

        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing", "ci"}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
