"""Presentation-layer dependency injection (composition root).

Builds the sub-flow manager from the shared Keycloak client. Routes depend
only on these dependencies, not on infrastructure directly; tests override
get_keycloak_rest_client to point at a fake server.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from authflow.application.services.subflow_manager import SubFlowManager
from authflow.infrastructure.keycloak._rest_client import KeycloakRESTClient
from authflow.infrastructure.keycloak.client import get_keycloak_client
from authflow.infrastructure.keycloak.repositories import (
    KeycloakExecutionRepository,
    KeycloakFlowRepository,
)


def get_keycloak_rest_client() -> KeycloakRESTClient:
    """Shared Keycloak admin client."""
    return get_keycloak_client()


def get_subflow_manager(
    client: Annotated[KeycloakRESTClient, Depends(get_keycloak_rest_client)],
) -> SubFlowManager:
    """Sub-flow manager over Keycloak-backed repositories (stateless; built per request)."""
    return SubFlowManager(
        flow_repo=KeycloakFlowRepository(client),
        execution_repo=KeycloakExecutionRepository(client),
    )
