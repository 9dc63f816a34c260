"""Health and request id echo endpoints.

- GET /health: service status
- GET /request-id: the correlation id established for this request
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from request_id.dependencies import get_request_id
from request_id.models.responses import ApiResponse


def create_health_router() -> APIRouter:
    """Factory that creates the health router."""

    health_router = APIRouter(tags=["health"])

    @health_router.get("/health")
    async def health(request: Request) -> dict:
        """Service health check."""
        return ApiResponse.ok(
            {"status": "healthy"},
            request_id=getattr(request.state, "request_id", None),
        ).model_dump()

    @health_router.get("/request-id")
    async def current_request_id(request_id: str = Depends(get_request_id)) -> dict:
        """Echo the id the middleware assigned to this request."""
        return ApiResponse.ok({"request_id": request_id}).model_dump()

    return health_router
