"""Pydantic Settings for request id correlation.

All environment variables use the REQUEST_ID_ prefix.
Example: REQUEST_ID_RESPONSE_HEADER=X-Request-Id, REQUEST_ID_TRUST_REQUEST_HEADER=false
"""

from __future__ import annotations

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings

from request_id.listener import HeaderConfig, validate_header_name


class RequestIdSettings(BaseSettings):
    """Request id configuration validated from environment variables."""

    # Headers
    request_header: str = "Request-Id"  # Read on the way in
    response_header: str = "Response-Id"  # Written on the way out
    trust_request_header: bool = True

    # Collaborators
    generator: Literal["uuid4", "token"] = "uuid4"
    storage: Literal["context"] = "context"  # Must stay request-scoped under concurrency

    # Logging
    log_level: str = "INFO"
    json_logs: bool = True
    enable_log_filter: bool = True  # Stamp every log record with the request id

    model_config = {"env_prefix": "REQUEST_ID_"}

    @field_validator("request_header", "response_header")
    @classmethod
    def _check_header_name(cls, value: str) -> str:
        return validate_header_name(value)

    def header_config(self) -> HeaderConfig:
        """Immutable header configuration handed to the listener."""
        return HeaderConfig(
            request_header=self.request_header,
            response_header=self.response_header,
            trust_request_header=self.trust_request_header,
        )
