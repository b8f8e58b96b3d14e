"""Cert cache configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backend-specific requirements (e.g. Firestore
credentials) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from certcache.core.constants import (
    BACKEND_FIRESTORE,
    DEFAULT_COLLECTION,
    DEFAULT_DATABASE_ID,
    REDIS_DEFAULT_PREFIX,
    SUPPORTED_BACKENDS,
)
from certcache.domain.enums import ValueEncoding


class Settings(BaseSettings):
    """Cert cache settings loaded from environment and .env.

    Only the Firestore backend has required fields (service account key or
    path); see validate_backend.
    """

    # App
    app_name: str = "certcache"
    debug: bool = False

    # Backend selection: "firestore", "redis" or "memory"
    cert_cache_backend: str = BACKEND_FIRESTORE
    cert_cache_collection: str = DEFAULT_COLLECTION
    cert_cache_value_encoding: str = ValueEncoding.BASE64.value

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file
    # None = take project_id from the service account JSON
    firestore_project_id: str | None = None
    firestore_database_id: str = DEFAULT_DATABASE_ID
    firestore_http_timeout_seconds: float = 30.0

    # Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_key_prefix: str = REDIS_DEFAULT_PREFIX

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("cert_cache_backend", "cert_cache_value_encoding", mode="before")
    @classmethod
    def _normalize_choice(cls, v: object) -> object:
        """Accept 'Memory' or ' TEXT ' from the environment as 'memory' and 'text'."""
        return v.strip().lower() if isinstance(v, str) else v

    @model_validator(mode="after")
    def validate_backend(self) -> "Settings":
        """Validate backend name, value encoding and Firestore credentials.

        - Firestore: FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH required.
        - Redis / memory: nothing required.
        """
        if self.cert_cache_backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"cert_cache_backend must be one of {', '.join(SUPPORTED_BACKENDS)}, "
                f"got: {self.cert_cache_backend!r}"
            )
        if self.cert_cache_value_encoding not in ValueEncoding.values():
            raise ValueError(
                f"cert_cache_value_encoding must be one of {', '.join(ValueEncoding.values())}, "
                f"got: {self.cert_cache_value_encoding!r}"
            )
        if not self.cert_cache_collection or "/" in self.cert_cache_collection:
            raise ValueError(
                f"cert_cache_collection must be a non-empty name without '/', "
                f"got: {self.cert_cache_collection!r}"
            )
        if self.cert_cache_backend == BACKEND_FIRESTORE:
            has_key = (
                self.firebase_service_account_key
                and self.firebase_service_account_key.get_secret_value()
            )
            if not has_key and not self.firebase_service_account_path:
                raise ValueError(
                    "When cert_cache_backend is 'firestore', set FIREBASE_SERVICE_ACCOUNT_KEY "
                    "(full JSON string) or FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file)."
                )
        return self

    @property
    def value_encoding(self) -> ValueEncoding:
        """Return cert_cache_value_encoding as a ValueEncoding."""
        return ValueEncoding(self.cert_cache_value_encoding)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
