"""API version 1."""

from authflow.api.v1.router import api_router

__all__ = ["api_router"]
