"""FastAPI application entry point.

Wires settings → storage, generator and listener, then installs the error
handlers, the request id middleware and the health routes. Logging is
configured on startup so every record carries the current request id.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from request_id.config.settings import RequestIdSettings
from request_id.generator import create_generator
from request_id.listener import RequestIdListener
from request_id.logging_config import configure_logging
from request_id.middleware.error_handler import register_error_handlers
from request_id.middleware.request_id import RequestIdMiddleware
from request_id.routers.health import create_health_router
from request_id.storage import create_storage

logger = logging.getLogger(__name__)


def build_listener(settings: RequestIdSettings) -> RequestIdListener:
    """Build the listener and its collaborators from *settings*."""
    return RequestIdListener(
        config=settings.header_config(),
        storage=create_storage(settings.storage),
        generator=create_generator(settings.generator),
    )


def create_app(settings: RequestIdSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Settings are loaded eagerly so that an invalid header name in the
    environment fails at startup instead of on the first request.
    """
    if settings is None:
        settings = RequestIdSettings()

    listener = build_listener(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(
            settings.log_level,
            storage=listener.storage if settings.enable_log_filter else None,
            json_logs=settings.json_logs,
        )
        logger.info(
            "Request id correlation enabled (in: %s, out: %s, trust: %s)",
            settings.request_header,
            settings.response_header,
            settings.trust_request_header,
        )
        yield

    app = FastAPI(
        title="Request ID Service",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.listener = listener

    register_error_handlers(app)
    app.add_middleware(RequestIdMiddleware, listener=listener)
    app.include_router(create_health_router())

    return app


app = create_app()
