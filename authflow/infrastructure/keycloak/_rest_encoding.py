"""Encode/decode domain entities to/from Keycloak admin API JSON."""

from typing import Any

from authflow.domain.entities import (
    AuthenticationExecution,
    AuthenticationSubFlow,
    ExecutionRequirementUpdate,
)


def encode_subflow_create(subflow: AuthenticationSubFlow) -> dict[str, Any]:
    """Body for POST .../flows/{parent}/executions/flow.

    type is the flow provider id; provider is the execution authenticator
    (may be empty).
    """
    return {
        "alias": subflow.alias,
        "type": subflow.provider_id,
        "provider": subflow.authenticator,
        "description": subflow.description,
    }


def encode_flow(subflow: AuthenticationSubFlow) -> dict[str, Any]:
    """Flow representation for PUT .../flows/{id}. Execution-half fields are never included."""
    body: dict[str, Any] = {
        "alias": subflow.alias,
        "providerId": subflow.provider_id,
        "topLevel": subflow.top_level,
        "builtIn": subflow.built_in,
        "description": subflow.description,
    }
    if subflow.id:
        body["id"] = subflow.id
    return body


def decode_flow(data: dict[str, Any]) -> AuthenticationSubFlow:
    """Flow representation to a sub-flow with only the flow half filled in."""
    return AuthenticationSubFlow(
        id=data.get("id", ""),
        alias=data.get("alias", ""),
        realm_id="",
        parent_flow_alias="",
        provider_id=data.get("providerId", ""),
        description=data.get("description") or "",
        top_level=bool(data.get("topLevel", False)),
        built_in=bool(data.get("builtIn", False)),
    )


def decode_execution(data: dict[str, Any]) -> AuthenticationExecution:
    """Execution from either the by-id representation or a list entry.

    The by-id form names the authenticator 'authenticator'; list entries name
    it 'providerId'.
    """
    return AuthenticationExecution(
        id=data.get("id", ""),
        flow_id=data.get("flowId") or None,
        authenticator=data.get("authenticator") or data.get("providerId") or "",
        requirement=data.get("requirement") or "",
        priority=int(data.get("priority") or 0),
        parent_flow_id=data.get("parentFlow"),
        display_name=data.get("displayName"),
        level=data.get("level"),
        index=data.get("index"),
    )


def encode_requirement_update(update: ExecutionRequirementUpdate) -> dict[str, Any]:
    """Body for PUT .../flows/{parent}/executions."""
    return {
        "id": update.id,
        "requirement": update.requirement,
        "priority": update.priority,
    }
