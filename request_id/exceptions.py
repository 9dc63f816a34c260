"""Error hierarchy for the request id package.

All package-specific errors extend RequestIdError. The FastAPI exception
handlers in ``request_id.middleware.error_handler`` turn them into the JSON
envelope: { success, data, error, meta }.
"""

from __future__ import annotations


class RequestIdError(Exception):
    """Base error for all request id errors."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(RequestIdError):
    """Invalid request id configuration."""

    message = "Invalid request id configuration"


class InvalidHeaderNameError(ConfigurationError, ValueError):
    """Configured header name is not a valid HTTP field name."""

    message = "Invalid header name"


class MissingRequestIdError(RequestIdError):
    """No request id was established for the current request."""

    message = "No request id established for this request"
