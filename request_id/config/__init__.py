"""Configuration module: request id settings."""

from request_id.config.settings import RequestIdSettings

__all__ = ["RequestIdSettings"]
