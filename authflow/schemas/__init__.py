"""Pydantic request/response schemas for the HTTP API."""

from authflow.schemas.health import HealthResponse
from authflow.schemas.subflow import (
    SubFlowCreateRequest,
    SubFlowResponse,
    SubFlowUpdateRequest,
)

__all__ = [
    "HealthResponse",
    "SubFlowCreateRequest",
    "SubFlowResponse",
    "SubFlowUpdateRequest",
]
