"""Application interfaces (ports): repository protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from authflow.infrastructure.
"""

from authflow.application.interfaces.repositories import (
    IAuthenticationExecutionRepository,
    IAuthenticationFlowRepository,
)

__all__ = [
    "IAuthenticationExecutionRepository",
    "IAuthenticationFlowRepository",
]
