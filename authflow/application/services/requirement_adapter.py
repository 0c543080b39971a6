"""Translate sub-flow requirement/priority changes into execution primitive calls."""

from authflow.application.interfaces.repositories import (
    IAuthenticationExecutionRepository,
)
from authflow.domain.entities import ExecutionRequirementUpdate


class RequirementPriorityAdapter:
    """Pure delegation to the execution repository; no retries, errors propagate.

    All methods take an execution id. Passing a sub-flow (flow) id here is a
    caller bug: resolve it with ExecutionLocator first.
    """

    def __init__(self, execution_repo: IAuthenticationExecutionRepository) -> None:
        self._execution_repo = execution_repo

    async def sync_requirement(
        self,
        realm_id: str,
        parent_flow_alias: str,
        execution_id: str,
        requirement: str,
        priority: int,
    ) -> None:
        """Push requirement and priority onto the execution."""
        await self._execution_repo.update_requirement(
            ExecutionRequirementUpdate(
                realm_id=realm_id,
                parent_flow_alias=parent_flow_alias,
                id=execution_id,
                requirement=requirement,
                priority=priority,
            )
        )

    async def raise_priority(self, realm_id: str, execution_id: str) -> None:
        """Move the execution one place up among its siblings."""
        await self._execution_repo.raise_priority(realm_id, execution_id)

    async def lower_priority(self, realm_id: str, execution_id: str) -> None:
        """Move the execution one place down among its siblings."""
        await self._execution_repo.lower_priority(realm_id, execution_id)
