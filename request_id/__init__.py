"""Request id correlation for Starlette/FastAPI applications."""

from request_id.exceptions import (
    ConfigurationError,
    InvalidHeaderNameError,
    MissingRequestIdError,
    RequestIdError,
)
from request_id.generator import (
    RequestIdGenerator,
    TokenGenerator,
    Uuid4Generator,
    create_generator,
)
from request_id.listener import (
    HeaderConfig,
    RequestEvent,
    RequestIdListener,
    ResponseEvent,
)
from request_id.storage import (
    ContextVarRequestIdStorage,
    RequestIdStorage,
    SimpleRequestIdStorage,
    create_storage,
)

__all__ = [
    "ConfigurationError",
    "ContextVarRequestIdStorage",
    "HeaderConfig",
    "InvalidHeaderNameError",
    "MissingRequestIdError",
    "RequestEvent",
    "RequestIdError",
    "RequestIdGenerator",
    "RequestIdListener",
    "RequestIdStorage",
    "ResponseEvent",
    "SimpleRequestIdStorage",
    "TokenGenerator",
    "Uuid4Generator",
    "create_generator",
    "create_storage",
]
