"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from authflow.api.v1.dependencies.
"""

from fastapi import APIRouter

from authflow.api.v1.endpoints import health, subflows

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(
    subflows.router,
    prefix="/realms/{realm_id}/flows/{parent_flow_alias}/subflows",
    tags=["subflows"],
)
