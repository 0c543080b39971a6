"""Keycloak-backed execution repository (implements IAuthenticationExecutionRepository).

Generic execution primitives; the sub-flow manager only ever calls them with
ids resolved by ExecutionLocator.
"""

from __future__ import annotations

from authflow.domain.entities import (
    AuthenticationExecution,
    ExecutionRequirementUpdate,
)
from authflow.infrastructure.keycloak._rest_client import (
    KeycloakRESTClient,
    path_segment,
)
from authflow.infrastructure.keycloak._rest_encoding import (
    decode_execution,
    encode_requirement_update,
)


def _executions_path(realm_id: str) -> str:
    return f"/realms/{path_segment(realm_id)}/authentication/executions"


def _flow_executions_path(realm_id: str, parent_flow_alias: str) -> str:
    return (
        f"/realms/{path_segment(realm_id)}/authentication/flows/"
        f"{path_segment(parent_flow_alias)}/executions"
    )


class KeycloakExecutionRepository:
    """Execution list, lookup, requirement update, delete and priority swaps."""

    def __init__(self, client: KeycloakRESTClient) -> None:
        self._client = client

    async def list_executions(
        self, realm_id: str, parent_flow_alias: str
    ) -> list[AuthenticationExecution]:
        """Return the parent flow's executions in the order Keycloak lists them."""
        data = await self._client.get(
            _flow_executions_path(realm_id, parent_flow_alias), resource_type="flow"
        )
        return [decode_execution(item) for item in data or []]

    async def get_execution(
        self, realm_id: str, execution_id: str
    ) -> AuthenticationExecution:
        """Return one execution by id."""
        data = await self._client.get(
            f"{_executions_path(realm_id)}/{path_segment(execution_id)}",
            resource_type="execution",
        )
        return decode_execution(data or {})

    async def update_requirement(self, update: ExecutionRequirementUpdate) -> None:
        """PUT requirement and priority for update.id."""
        await self._client.put(
            _flow_executions_path(update.realm_id, update.parent_flow_alias),
            encode_requirement_update(update),
            resource_type="execution",
        )

    async def delete_execution(self, realm_id: str, execution_id: str) -> None:
        """Delete the execution; for a sub-flow placeholder Keycloak removes the flow too."""
        await self._client.delete(
            f"{_executions_path(realm_id)}/{path_segment(execution_id)}",
            resource_type="execution",
        )

    async def raise_priority(self, realm_id: str, execution_id: str) -> None:
        await self._client.post(
            f"{_executions_path(realm_id)}/{path_segment(execution_id)}/raise-priority",
            resource_type="execution",
        )

    async def lower_priority(self, realm_id: str, execution_id: str) -> None:
        await self._client.post(
            f"{_executions_path(realm_id)}/{path_segment(execution_id)}/lower-priority",
            resource_type="execution",
        )
