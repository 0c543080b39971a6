"""Domain entities.

Pure domain models; no HTTP or wire-format concerns.
"""

from authflow.domain.entities.subflow import (
    AuthenticationExecution,
    AuthenticationSubFlow,
    ExecutionRequirementUpdate,
)

__all__ = [
    "AuthenticationExecution",
    "AuthenticationSubFlow",
    "ExecutionRequirementUpdate",
]
