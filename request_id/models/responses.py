"""JSON envelope shared by the demo routes and the error handlers.

{ success: bool, data: T | None, error: str | None, meta: dict | None }

``meta.request_id`` carries the correlation id when one was established, so a
client can quote it even if it ignored the response header.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """JSON envelope for all API responses."""

    success: bool
    data: T | None = None
    error: str | None = None
    meta: dict | None = None

    @classmethod
    def ok(cls, data: T, request_id: str | None = None) -> "ApiResponse[T]":
        return cls(success=True, data=data, meta=_meta(request_id))

    @classmethod
    def fail(
        cls, error: str, request_id: str | None = None, **details: object
    ) -> "ApiResponse[T]":
        meta = dict(details)
        if request_id:
            meta["request_id"] = request_id
        return cls(success=False, error=error, meta=meta or None)


def _meta(request_id: str | None) -> dict | None:
    return {"request_id": request_id} if request_id else None
