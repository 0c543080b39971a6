"""Domain enumerations for authentication flows.

Values match the strings the Keycloak admin API uses on the wire.
"""

from enum import Enum


class Requirement(str, Enum):
    """Execution requirement: whether an execution must pass for authentication to succeed."""

    REQUIRED = "REQUIRED"
    ALTERNATIVE = "ALTERNATIVE"
    DISABLED = "DISABLED"
    CONDITIONAL = "CONDITIONAL"
    OPTIONAL = "OPTIONAL"


class FlowProviderId(str, Enum):
    """Flow provider id: selects how the flow's executions are run."""

    BASIC_FLOW = "basic-flow"
    CLIENT_FLOW = "client-flow"
    FORM_FLOW = "form-flow"
