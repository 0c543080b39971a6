"""Sub-flow API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from authflow.domain.enums import FlowProviderId, Requirement


class SubFlowCreateRequest(BaseModel):
    """Request body for creating a sub-flow under a parent flow."""

    alias: str = Field(..., min_length=1, max_length=255)
    provider_id: FlowProviderId = FlowProviderId.BASIC_FLOW
    description: str = ""
    authenticator: str = ""
    requirement: Requirement = Requirement.DISABLED
    priority: int = 0


class SubFlowUpdateRequest(BaseModel):
    """Request body for updating a sub-flow (full replace of mutable fields).

    The authenticator is fixed at creation; sending it here is rejected.
    """

    model_config = ConfigDict(extra="forbid")

    alias: str = Field(..., min_length=1, max_length=255)
    provider_id: FlowProviderId = FlowProviderId.BASIC_FLOW
    description: str = ""
    requirement: Requirement = Requirement.DISABLED
    priority: int = 0


class SubFlowResponse(BaseModel):
    """Sub-flow with flow and execution fields merged."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    alias: str
    realm_id: str
    parent_flow_alias: str
    provider_id: str
    top_level: bool
    built_in: bool
    description: str
    authenticator: str
    requirement: str
    priority: int
