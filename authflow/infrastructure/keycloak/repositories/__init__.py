"""Keycloak admin API repositories."""

from authflow.infrastructure.keycloak.repositories.execution_repo_keycloak import (
    KeycloakExecutionRepository,
)
from authflow.infrastructure.keycloak.repositories.flow_repo_keycloak import (
    KeycloakFlowRepository,
)

__all__ = [
    "KeycloakExecutionRepository",
    "KeycloakFlowRepository",
]
