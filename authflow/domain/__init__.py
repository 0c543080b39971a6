"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from authflow.domain.entities import (
    AuthenticationExecution,
    AuthenticationSubFlow,
    ExecutionRequirementUpdate,
)
from authflow.domain.enums import FlowProviderId, Requirement
from authflow.domain.exceptions import (
    AuthflowException,
    ExecutionNotFoundException,
    NotFoundException,
    RemoteError,
    RemoteUnavailableException,
    ValidationException,
)

__all__ = [
    # Entities
    "AuthenticationExecution",
    "AuthenticationSubFlow",
    "ExecutionRequirementUpdate",
    # Enums
    "FlowProviderId",
    "Requirement",
    # Exceptions
    "AuthflowException",
    "ExecutionNotFoundException",
    "NotFoundException",
    "RemoteError",
    "RemoteUnavailableException",
    "ValidationException",
]
