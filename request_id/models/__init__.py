"""Pydantic models for API responses."""

from request_id.models.responses import ApiResponse

__all__ = ["ApiResponse"]
