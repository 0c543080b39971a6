"""Keycloak admin REST API integration."""

from authflow.infrastructure.keycloak.client import (
    close_keycloak,
    get_keycloak_client,
    init_keycloak,
)

__all__ = [
    "close_keycloak",
    "get_keycloak_client",
    "init_keycloak",
]
