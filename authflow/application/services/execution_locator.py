"""Find the execution that places a sub-flow inside its parent flow.

Keycloak has no "execution by flow id" lookup, so the parent's execution
list is fetched and scanned on every call. Nothing is cached: the list can
change between calls.
"""

from authflow.application.interfaces.repositories import (
    IAuthenticationExecutionRepository,
)
from authflow.domain.exceptions import (
    ExecutionNotFoundException,
    ValidationException,
)
from authflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class ExecutionLocator:
    """Resolve a sub-flow (flow) id to the id of its execution in the parent flow."""

    def __init__(self, execution_repo: IAuthenticationExecutionRepository) -> None:
        self._execution_repo = execution_repo

    async def locate(
        self, realm_id: str, parent_flow_alias: str, subflow_id: str
    ) -> str:
        """Return the id of the execution whose flow_id equals subflow_id.

        Args:
            realm_id: Realm of the parent flow.
            parent_flow_alias: Alias of the parent flow.
            subflow_id: Flow id of the sub-flow.

        Returns:
            Execution id.

        Raises:
            ValidationException: subflow_id is empty.
            ExecutionNotFoundException: No execution references subflow_id.
        """
        if not subflow_id:
            raise ValidationException("Sub-flow id is required", field="subflow_id")
        executions = await self._execution_repo.list_executions(
            realm_id, parent_flow_alias
        )
        for execution in executions:
            if execution.references(subflow_id):
                return execution.id
        logger.debug(
            "No execution for sub-flow %s among %d executions of %s/%s",
            subflow_id,
            len(executions),
            realm_id,
            parent_flow_alias,
        )
        raise ExecutionNotFoundException(realm_id, parent_flow_alias, subflow_id)
