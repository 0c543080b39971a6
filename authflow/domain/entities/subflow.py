"""Sub-flow and execution domain entities.

A sub-flow is stored by Keycloak as two linked resources: a flow definition
and an execution in the parent flow whose flow_id points back at it. The
sub-flow entity carries fields of both halves; realm_id and parent_flow_alias
are addressing only and never sent on a flow payload.
"""

from dataclasses import dataclass

from authflow.domain.exceptions import ValidationException


@dataclass
class AuthenticationSubFlow:
    """Logical sub-flow: flow half plus the execution half that places it in its parent.

    Mutable on purpose: create() assigns id on the caller's object so a
    partially failed create can be resumed with update() instead of a second
    create.
    """

    alias: str
    realm_id: str
    parent_flow_alias: str
    provider_id: str = "basic-flow"
    id: str = ""
    description: str = ""
    top_level: bool = False
    built_in: bool = False
    # execution half
    authenticator: str = ""
    priority: int = 0
    requirement: str = "DISABLED"

    def enforce_guardrails(self) -> None:
        """Sub-flows are never top-level and never written as built-in."""
        self.top_level = False
        self.built_in = False

    def validate_addressing(self) -> None:
        """Raise ValidationException unless realm and parent alias are set."""
        if not self.realm_id:
            raise ValidationException("Sub-flow must belong to a realm", field="realm_id")
        if not self.parent_flow_alias:
            raise ValidationException(
                "Sub-flow must name its parent flow", field="parent_flow_alias"
            )

    def validate_for_create(self) -> None:
        """Check create preconditions: no id yet, addressing set, alias and provider set."""
        if self.id:
            raise ValidationException(
                f"Sub-flow already has id {self.id}; use update instead", field="id"
            )
        self.validate_addressing()
        if not self.alias:
            raise ValidationException("Sub-flow alias is required", field="alias")
        if not self.provider_id:
            raise ValidationException("Sub-flow provider id is required", field="provider_id")

    def validate_for_update(self) -> None:
        """Check update preconditions: id and addressing set."""
        if not self.id:
            raise ValidationException("Sub-flow id is required for update", field="id")
        self.validate_addressing()


@dataclass(frozen=True)
class AuthenticationExecution:
    """One entry of a flow's execution list (referenced, not owned).

    flow_id is set only when the execution is a sub-flow placeholder.
    """

    id: str
    flow_id: str | None = None
    authenticator: str = ""
    requirement: str = ""
    priority: int = 0
    parent_flow_id: str | None = None
    display_name: str | None = None
    level: int | None = None
    index: int | None = None

    def references(self, flow_id: str) -> bool:
        """Return True when this execution is the placeholder for flow_id."""
        return bool(flow_id) and self.flow_id == flow_id


@dataclass(frozen=True)
class ExecutionRequirementUpdate:
    """Requirement/priority update for one execution. id is an execution id, never a flow id."""

    realm_id: str
    parent_flow_alias: str
    id: str
    requirement: str
    priority: int
