"""FastAPI dependencies exposing the current request id to route handlers."""

from __future__ import annotations

from fastapi import Request

from request_id.exceptions import MissingRequestIdError


def get_request_id(request: Request) -> str:
    """Return the id the middleware established for *request*.

    Raises ``MissingRequestIdError`` when the app runs without
    ``RequestIdMiddleware``.
    """
    request_id = getattr(request.state, "request_id", None)
    if not request_id:
        raise MissingRequestIdError()
    return request_id
