"""Process-wide Keycloak admin client.

Initialized at app startup from settings (KEYCLOAK_URL plus either a client
secret or username/password). One httpx connection pool is shared by all
requests and closed at shutdown.
"""

import logging

from authflow.core.config import Settings, get_settings
from authflow.infrastructure.keycloak._rest_client import KeycloakRESTClient

logger = logging.getLogger(__name__)

_keycloak_client: KeycloakRESTClient | None = None


def build_keycloak_client(settings: Settings) -> KeycloakRESTClient:
    """Create a KeycloakRESTClient from settings (no network I/O)."""
    return KeycloakRESTClient(
        settings.keycloak_root,
        auth_realm=settings.keycloak_auth_realm,
        client_id=settings.keycloak_client_id,
        client_secret=(
            settings.keycloak_client_secret.get_secret_value()
            if settings.keycloak_client_secret
            else None
        ),
        username=settings.keycloak_username,
        password=(
            settings.keycloak_password.get_secret_value()
            if settings.keycloak_password
            else None
        ),
        timeout=settings.keycloak_timeout_seconds,
        verify=settings.keycloak_tls_verify,
    )


def init_keycloak(settings: Settings | None = None) -> KeycloakRESTClient:
    """Initialize the shared client. Idempotent if already initialized."""
    global _keycloak_client
    if _keycloak_client is None:
        s = settings or get_settings()
        _keycloak_client = build_keycloak_client(s)
        logger.info(
            "Keycloak client initialized for %s (auth realm %s)",
            s.keycloak_root,
            s.keycloak_auth_realm,
        )
    return _keycloak_client


def get_keycloak_client() -> KeycloakRESTClient:
    """Return the shared client, initializing it on first use."""
    return _keycloak_client if _keycloak_client is not None else init_keycloak()


async def close_keycloak() -> None:
    """Close the client's HTTP connection pool. Call from app shutdown."""
    global _keycloak_client
    if _keycloak_client is not None:
        await _keycloak_client.aclose()
        _keycloak_client = None
        logger.info("Keycloak HTTP client closed")
