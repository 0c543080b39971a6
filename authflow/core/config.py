"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (KEYCLOAK_URL and credentials) are
validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Keycloak credentials: client-credentials grant by default
    (keycloak_client_id + keycloak_client_secret); password grant when
    keycloak_username is set (then keycloak_password is required and the
    secret is optional, e.g. for the public admin-cli client).
    """

    # App
    app_name: str = "authflow"
    app_version: str = "1.0.0"
    debug: bool = False

    # Keycloak admin API
    keycloak_url: str = ""
    # "" for Keycloak >= 17, "/auth" for older WildFly-based distributions
    keycloak_base_path: str = ""
    keycloak_auth_realm: str = "master"
    keycloak_client_id: str = "admin-cli"
    keycloak_client_secret: SecretStr | None = None
    keycloak_username: str | None = None
    keycloak_password: SecretStr | None = None
    keycloak_timeout_seconds: float = 15.0
    keycloak_tls_verify: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_keycloak(self) -> "Settings":
        """Validate Keycloak URL and that one complete credential set is present."""
        if not self.keycloak_url:
            raise ValueError(
                "KEYCLOAK_URL is required (e.g. http://localhost:8080). "
                "Set in environment or .env file."
            )
        if self.keycloak_base_path and not self.keycloak_base_path.startswith("/"):
            raise ValueError(
                f"KEYCLOAK_BASE_PATH must start with '/', got: {self.keycloak_base_path!r}"
            )
        if self.keycloak_username:
            has_password = (
                self.keycloak_password
                and self.keycloak_password.get_secret_value()
            )
            if not has_password:
                raise ValueError(
                    "KEYCLOAK_PASSWORD is required when KEYCLOAK_USERNAME is set."
                )
        else:
            has_secret = (
                self.keycloak_client_secret
                and self.keycloak_client_secret.get_secret_value()
            )
            if not has_secret:
                raise ValueError(
                    "Set KEYCLOAK_CLIENT_SECRET (client-credentials grant) or "
                    "KEYCLOAK_USERNAME and KEYCLOAK_PASSWORD (password grant)."
                )
        return self

    @property
    def keycloak_root(self) -> str:
        """Keycloak URL joined with the base path, without trailing slash."""
        return f"{self.keycloak_url.rstrip('/')}{self.keycloak_base_path.rstrip('/')}"


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
