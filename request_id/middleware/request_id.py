"""Request ID middleware.

Drives ``RequestIdListener`` from the Starlette request lifecycle:

- opens the storage scope for the request,
- calls ``on_request_start`` with the ASGI scope's headers (mutated in place,
  so downstream handlers see the id) and stores the id in
  ``request.state.request_id``,
- calls ``on_response_ready`` with the response headers.

An exception escaping the app skips ``on_response_ready``; the unhandled
error handler then echoes ``request.state.request_id`` in the header named by
``request.state.response_header``.

The first pass of a request through this middleware is the main request. A
later pass over the same ASGI scope (a nested application mounted with its own
copy of the middleware) is a sub-request and is left alone by the listener.
"""

from __future__ import annotations

import logging

from fastapi import Request
from starlette.datastructures import MutableHeaders
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import Scope

from request_id.listener import RequestEvent, RequestIdListener, ResponseEvent

logger = logging.getLogger(__name__)

# Set on the ASGI scope by the first pass of a request.
SEEN_SCOPE_KEY = "request_id.seen"


def is_main_request(scope: Scope) -> bool:
    """True on the first pass of a request through ``RequestIdMiddleware``."""
    return not scope.get(SEEN_SCOPE_KEY, False)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that establishes a request id for each request.

    The inbound header is reused when trusted; otherwise an id already in
    storage is reused, and only then a new one is generated. The id is echoed
    back in the configured response header.
    """

    def __init__(self, app, listener: RequestIdListener) -> None:  # noqa: ANN001
        super().__init__(app)
        self._listener = listener

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        main = is_main_request(request.scope)
        request.scope[SEEN_SCOPE_KEY] = True

        with self._listener.storage.scope():
            headers = MutableHeaders(scope=request.scope)
            self._listener.on_request_start(RequestEvent(headers, is_main_request=main))

            if main:
                request_id = headers.get(self._listener.config.request_header)
                request.state.request_id = request_id
                request.state.response_header = self._listener.config.response_header
                logger.debug(
                    "Request id assigned",
                    extra={
                        "request_id": request_id,
                        "method": request.method,
                        "path": request.url.path,
                    },
                )

            response: Response = await call_next(request)
            self._listener.on_response_ready(ResponseEvent(response.headers, is_main_request=main))
            return response
