"""Repository interfaces (ports) for the application layer.

Protocols define the contracts the Keycloak-backed implementations fulfill
(DIP). Only domain types appear here; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from authflow.domain.entities import (
        AuthenticationExecution,
        AuthenticationSubFlow,
        ExecutionRequirementUpdate,
    )


class IAuthenticationFlowRepository(Protocol):
    """Protocol for the flow half of a sub-flow."""

    async def create_subflow(self, subflow: AuthenticationSubFlow) -> str:
        """Create the flow as a child execution of its parent; return the new flow id."""

    async def get_flow(self, realm_id: str, flow_id: str) -> AuthenticationSubFlow:
        """Return the flow by id (flow-half fields only). Raises NotFoundException."""

    async def update_flow(self, subflow: AuthenticationSubFlow) -> None:
        """Replace the flow representation by id."""


class IAuthenticationExecutionRepository(Protocol):
    """Protocol for the generic execution primitives."""

    async def list_executions(
        self, realm_id: str, parent_flow_alias: str
    ) -> list[AuthenticationExecution]:
        """Return the parent flow's executions in list order."""

    async def get_execution(
        self, realm_id: str, execution_id: str
    ) -> AuthenticationExecution:
        """Return one execution by id. Raises NotFoundException."""

    async def update_requirement(self, update: ExecutionRequirementUpdate) -> None:
        """Set requirement and priority of one execution."""

    async def delete_execution(self, realm_id: str, execution_id: str) -> None:
        """Delete one execution by id."""

    async def raise_priority(self, realm_id: str, execution_id: str) -> None:
        """Swap the execution with its preceding sibling."""

    async def lower_priority(self, realm_id: str, execution_id: str) -> None:
        """Swap the execution with its following sibling."""
