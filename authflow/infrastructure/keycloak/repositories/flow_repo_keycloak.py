"""Keycloak-backed flow repository (implements IAuthenticationFlowRepository)."""

from __future__ import annotations

from authflow.domain.entities import AuthenticationSubFlow
from authflow.domain.exceptions import RemoteError
from authflow.infrastructure.keycloak._rest_client import (
    KeycloakRESTClient,
    id_from_location,
    path_segment,
)
from authflow.infrastructure.keycloak._rest_encoding import (
    decode_flow,
    encode_flow,
    encode_subflow_create,
)


def _flows_path(realm_id: str) -> str:
    return f"/realms/{path_segment(realm_id)}/authentication/flows"


class KeycloakFlowRepository:
    """Flow half of a sub-flow, via the authentication-management admin API."""

    def __init__(self, client: KeycloakRESTClient) -> None:
        self._client = client

    async def create_subflow(self, subflow: AuthenticationSubFlow) -> str:
        """Create flow + execution in the parent in one call; return the flow id from Location."""
        path = (
            f"{_flows_path(subflow.realm_id)}/"
            f"{path_segment(subflow.parent_flow_alias)}/executions/flow"
        )
        _, location = await self._client.post(
            path, encode_subflow_create(subflow), resource_type="flow"
        )
        if not location:
            raise RemoteError(201, "sub-flow created without a Location header", path)
        return id_from_location(location)

    async def get_flow(self, realm_id: str, flow_id: str) -> AuthenticationSubFlow:
        """Return the flow by id."""
        data = await self._client.get(
            f"{_flows_path(realm_id)}/{path_segment(flow_id)}", resource_type="flow"
        )
        return decode_flow(data or {})

    async def update_flow(self, subflow: AuthenticationSubFlow) -> None:
        """PUT the full flow representation."""
        await self._client.put(
            f"{_flows_path(subflow.realm_id)}/{path_segment(subflow.id)}",
            encode_flow(subflow),
            resource_type="flow",
        )
