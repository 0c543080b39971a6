"""Sub-flow API: thin routes delegating to SubFlowManager.

Mounted under /realms/{realm_id}/flows/{parent_flow_alias}/subflows.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from authflow.api.v1.dependencies import get_subflow_manager
from authflow.application.services.subflow_manager import SubFlowManager
from authflow.domain.entities import AuthenticationSubFlow
from authflow.schemas.subflow import (
    SubFlowCreateRequest,
    SubFlowResponse,
    SubFlowUpdateRequest,
)

router = APIRouter()


@router.post("", response_model=SubFlowResponse, status_code=201)
async def create_subflow(
    realm_id: str,
    parent_flow_alias: str,
    body: SubFlowCreateRequest,
    manager: Annotated[SubFlowManager, Depends(get_subflow_manager)],
):
    """Create a sub-flow (flow + execution) and return it as read back from Keycloak."""
    subflow = AuthenticationSubFlow(
        alias=body.alias,
        realm_id=realm_id,
        parent_flow_alias=parent_flow_alias,
        provider_id=body.provider_id.value,
        description=body.description,
        authenticator=body.authenticator,
        requirement=body.requirement.value,
        priority=body.priority,
    )
    await manager.create(subflow)
    created = await manager.read(realm_id, parent_flow_alias, subflow.id)
    return SubFlowResponse.model_validate(created)


@router.get("/{subflow_id}", response_model=SubFlowResponse)
async def get_subflow(
    realm_id: str,
    parent_flow_alias: str,
    subflow_id: str,
    manager: Annotated[SubFlowManager, Depends(get_subflow_manager)],
):
    """Get a sub-flow by flow id."""
    subflow = await manager.read(realm_id, parent_flow_alias, subflow_id)
    return SubFlowResponse.model_validate(subflow)


@router.put("/{subflow_id}", response_model=SubFlowResponse)
async def update_subflow(
    realm_id: str,
    parent_flow_alias: str,
    subflow_id: str,
    body: SubFlowUpdateRequest,
    manager: Annotated[SubFlowManager, Depends(get_subflow_manager)],
):
    """Update flow fields and the execution's requirement/priority."""
    subflow = AuthenticationSubFlow(
        id=subflow_id,
        alias=body.alias,
        realm_id=realm_id,
        parent_flow_alias=parent_flow_alias,
        provider_id=body.provider_id.value,
        description=body.description,
        requirement=body.requirement.value,
        priority=body.priority,
    )
    await manager.update(subflow)
    updated = await manager.read(realm_id, parent_flow_alias, subflow_id)
    return SubFlowResponse.model_validate(updated)


@router.delete("/{subflow_id}", status_code=204)
async def delete_subflow(
    realm_id: str,
    parent_flow_alias: str,
    subflow_id: str,
    manager: Annotated[SubFlowManager, Depends(get_subflow_manager)],
) -> Response:
    """Delete the sub-flow (its execution; Keycloak removes the flow)."""
    await manager.delete(realm_id, parent_flow_alias, subflow_id)
    return Response(status_code=204)


@router.post("/{subflow_id}/raise-priority", status_code=204)
async def raise_subflow_priority(
    realm_id: str,
    parent_flow_alias: str,
    subflow_id: str,
    manager: Annotated[SubFlowManager, Depends(get_subflow_manager)],
) -> Response:
    """Move the sub-flow one place up in its parent."""
    await manager.raise_priority(realm_id, parent_flow_alias, subflow_id)
    return Response(status_code=204)


@router.post("/{subflow_id}/lower-priority", status_code=204)
async def lower_subflow_priority(
    realm_id: str,
    parent_flow_alias: str,
    subflow_id: str,
    manager: Annotated[SubFlowManager, Depends(get_subflow_manager)],
) -> Response:
    """Move the sub-flow one place down in its parent."""
    await manager.lower_priority(realm_id, parent_flow_alias, subflow_id)
    return Response(status_code=204)
