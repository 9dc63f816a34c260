"""Middleware package: request id propagation and error handlers."""

from request_id.middleware.error_handler import register_error_handlers
from request_id.middleware.request_id import RequestIdMiddleware

__all__ = [
    "RequestIdMiddleware",
    "register_error_handlers",
]
