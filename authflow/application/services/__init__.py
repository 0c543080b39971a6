"""Application services: execution lookup, requirement sync, sub-flow lifecycle."""

from authflow.application.services.execution_locator import ExecutionLocator
from authflow.application.services.requirement_adapter import (
    RequirementPriorityAdapter,
)
from authflow.application.services.subflow_manager import SubFlowManager

__all__ = [
    "ExecutionLocator",
    "RequirementPriorityAdapter",
    "SubFlowManager",
]
