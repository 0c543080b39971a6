"""Keycloak authentication sub-flow manager.

Keeps a sub-flow's two Keycloak resources (flow and parent execution)
consistent as one entity. Entry points: SubFlowManager for library use,
authflow.main:create_app for the HTTP API.
"""

from authflow.application.services import SubFlowManager
from authflow.domain.entities import AuthenticationSubFlow

__all__ = ["AuthenticationSubFlow", "SubFlowManager"]
