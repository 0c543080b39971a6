"""Sub-flow manager: create, read, update, delete and reorder a sub-flow as one entity.

Keycloak stores a sub-flow as a flow plus an execution in the parent flow and
offers no transaction across the two. Each operation here is a fixed sequence
of remote calls, awaited one after another. A failure stops the sequence
where it is; nothing is rolled back. The propagated exception keeps its type
and carries operation, step and subflow_id in its details.

Partial states:
    create: flow and execution exist after create_flow; if a later step fails
        the caller's object already holds the new id, so retry update(), not create().
    update: put_flow done but sync_requirement failed leaves the flow half
        updated and requirement/priority stale.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from authflow.application.interfaces.repositories import (
    IAuthenticationExecutionRepository,
    IAuthenticationFlowRepository,
)
from authflow.application.services.execution_locator import ExecutionLocator
from authflow.application.services.requirement_adapter import (
    RequirementPriorityAdapter,
)
from authflow.domain.entities import AuthenticationSubFlow
from authflow.domain.exceptions import AuthflowException, ValidationException
from authflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def _step(operation: str, step: str, subflow_id: str | None = None) -> Iterator[None]:
    """Annotate any AuthflowException raised inside the block with where it happened."""
    try:
        yield
    except AuthflowException as exc:
        exc.annotate(operation=operation, step=step, subflow_id=subflow_id or None)
        raise


class SubFlowManager:
    """Facade over the flow repository, execution locator and requirement adapter."""

    def __init__(
        self,
        flow_repo: IAuthenticationFlowRepository,
        execution_repo: IAuthenticationExecutionRepository,
        locator: ExecutionLocator | None = None,
        adapter: RequirementPriorityAdapter | None = None,
    ) -> None:
        self._flow_repo = flow_repo
        self._execution_repo = execution_repo
        self._locator = locator or ExecutionLocator(execution_repo)
        self._adapter = adapter or RequirementPriorityAdapter(execution_repo)

    async def create(self, subflow: AuthenticationSubFlow) -> AuthenticationSubFlow:
        """Create the flow and its execution, then push the remaining fields.

        Sets subflow.id in place as soon as Keycloak returns it.

        Raises:
            ValidationException: Preconditions not met (step 'validate').
            AuthflowException: Any remote failure, annotated with step and,
                after create_flow succeeded, subflow_id.
        """
        with _step("create", "validate"):
            subflow.validate_for_create()
        subflow.enforce_guardrails()

        with _step("create", "create_flow"):
            subflow.id = await self._flow_repo.create_subflow(subflow)
        logger.info(
            "Created sub-flow %s (%s) under %s/%s",
            subflow.alias,
            subflow.id,
            subflow.realm_id,
            subflow.parent_flow_alias,
        )

        try:
            await self._push(subflow, "create")
        except AuthflowException as exc:
            logger.warning(
                "Sub-flow %s created but not fully configured (step %s failed): %s",
                subflow.id,
                exc.step,
                exc.message,
            )
            raise
        return subflow

    async def read(
        self, realm_id: str, parent_flow_alias: str, subflow_id: str
    ) -> AuthenticationSubFlow:
        """Return the sub-flow with flow fields and execution fields merged.

        Raises:
            ValidationException: subflow_id is empty.
            NotFoundException: The flow or its execution does not exist.
        """
        with _step("read", "validate", subflow_id):
            if not subflow_id:
                raise ValidationException("Sub-flow id is required", field="subflow_id")
        with _step("read", "get_flow", subflow_id):
            subflow = await self._flow_repo.get_flow(realm_id, subflow_id)
        subflow.realm_id = realm_id
        subflow.parent_flow_alias = parent_flow_alias

        with _step("read", "locate_execution", subflow_id):
            execution_id = await self._locator.locate(
                realm_id, parent_flow_alias, subflow.id
            )
        with _step("read", "get_execution", subflow_id):
            execution = await self._execution_repo.get_execution(realm_id, execution_id)

        subflow.authenticator = execution.authenticator
        subflow.requirement = execution.requirement
        subflow.priority = execution.priority
        return subflow

    async def update(self, subflow: AuthenticationSubFlow) -> AuthenticationSubFlow:
        """PUT the flow half, then sync requirement/priority onto the execution half."""
        with _step("update", "validate", subflow.id):
            subflow.validate_for_update()
        try:
            await self._push(subflow, "update")
        except AuthflowException as exc:
            if exc.step != "put_flow":
                logger.warning(
                    "Sub-flow %s flow updated but execution not synced (step %s failed)",
                    subflow.id,
                    exc.step,
                )
            raise
        logger.info("Updated sub-flow %s", subflow.id)
        return subflow

    async def delete(
        self, realm_id: str, parent_flow_alias: str, subflow_id: str
    ) -> None:
        """Delete the sub-flow's execution; Keycloak removes the flow with it.

        A sub-flow whose execution cannot be found is reported as
        ExecutionNotFoundException (step 'locate_execution'), never as success.
        """
        with _step("delete", "locate_execution", subflow_id):
            execution_id = await self._locator.locate(
                realm_id, parent_flow_alias, subflow_id
            )
        with _step("delete", "delete_execution", subflow_id):
            await self._execution_repo.delete_execution(realm_id, execution_id)
        logger.info(
            "Deleted sub-flow %s (execution %s) from %s/%s",
            subflow_id,
            execution_id,
            realm_id,
            parent_flow_alias,
        )

    async def raise_priority(
        self, realm_id: str, parent_flow_alias: str, subflow_id: str
    ) -> None:
        """Swap the sub-flow's execution with the preceding sibling."""
        with _step("raise_priority", "locate_execution", subflow_id):
            execution_id = await self._locator.locate(
                realm_id, parent_flow_alias, subflow_id
            )
        with _step("raise_priority", "raise_priority", subflow_id):
            await self._adapter.raise_priority(realm_id, execution_id)

    async def lower_priority(
        self, realm_id: str, parent_flow_alias: str, subflow_id: str
    ) -> None:
        """Swap the sub-flow's execution with the following sibling."""
        with _step("lower_priority", "locate_execution", subflow_id):
            execution_id = await self._locator.locate(
                realm_id, parent_flow_alias, subflow_id
            )
        with _step("lower_priority", "lower_priority", subflow_id):
            await self._adapter.lower_priority(realm_id, execution_id)

    async def _push(self, subflow: AuthenticationSubFlow, operation: str) -> None:
        """Write the flow half, locate the execution, sync requirement and priority."""
        subflow.enforce_guardrails()
        with _step(operation, "put_flow", subflow.id):
            await self._flow_repo.update_flow(subflow)
        with _step(operation, "locate_execution", subflow.id):
            execution_id = await self._locator.locate(
                subflow.realm_id, subflow.parent_flow_alias, subflow.id
            )
        with _step(operation, "sync_requirement", subflow.id):
            await self._adapter.sync_requirement(
                subflow.realm_id,
                subflow.parent_flow_alias,
                execution_id,
                subflow.requirement,
                subflow.priority,
            )
