"""FastAPI exception handlers.

RequestIdError subclasses, Pydantic's RequestValidationError and unhandled
exceptions are turned into the JSON envelope { success, data, error, meta }.
When the request id middleware established an id for the failing request it
is reported in ``meta.request_id``; for unhandled exceptions, which bypass
the middleware on the way out, it is also set in the response header.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from request_id.exceptions import RequestIdError
from request_id.models.responses import ApiResponse

logger = logging.getLogger(__name__)


def _current_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _envelope(
    status_code: int,
    error: str,
    request_id: str | None = None,
    **details: object,
) -> JSONResponse:
    """Build a JSON envelope error response."""
    body = ApiResponse.fail(error, request_id=request_id, **details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def _request_id_error_handler(request: Request, exc: RequestIdError) -> JSONResponse:
    """Handle RequestIdError subclasses."""
    return _envelope(
        exc.status_code,
        exc.message,
        request_id=_current_request_id(request),
        **exc.details,
    )


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI / Pydantic RequestValidationError (422)."""
    field_errors = [
        {
            "field": " -> ".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    return _envelope(
        422,
        "Validation error",
        request_id=_current_request_id(request),
        fields=field_errors,
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions: log traceback, return generic 500."""
    request_id = _current_request_id(request)
    logger.error(
        "Unhandled exception: %s",
        exc,
        exc_info=exc,
        extra={"request_id": request_id, "method": request.method, "path": request.url.path},
    )
    response = _envelope(500, "Internal server error", request_id=request_id)
    header = getattr(request.state, "response_header", None)
    if request_id and header:
        response.headers[header] = request_id
    return response


def register_error_handlers(app: FastAPI) -> None:
    """Wire up all exception handlers on the FastAPI application."""
    app.add_exception_handler(RequestIdError, _request_id_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)  # type: ignore[arg-type]
