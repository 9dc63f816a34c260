"""Structured JSON logging configuration.

Configures Python logging to emit JSON-formatted log entries with required
fields: request_id, level, timestamp. HTTP fields (method, path, status_code)
are added when a log call passes them via ``extra``.

``RequestIdLogFilter`` stamps every record with the id held in request-scoped
storage, so plain ``logger.info(...)`` calls made while handling a request are
correlated without passing the id around.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from request_id.storage import RequestIdStorage

_HTTP_FIELDS = ("method", "path", "status_code")


class RequestIdLogFilter(logging.Filter):
    """Sets ``record.request_id`` from storage unless the record carries one.

    Attach to handlers rather than loggers so records propagated from child
    loggers are stamped too. Never drops a record.
    """

    def __init__(self, storage: RequestIdStorage) -> None:
        super().__init__()
        self._storage = storage

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = self._storage.get_request_id()
        return True


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON with structured fields.

    Each entry contains at minimum: request_id, level, timestamp, message.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }

        for name in _HTTP_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def configure_logging(
    level: str = "INFO",
    storage: RequestIdStorage | None = None,
    json_logs: bool = True,
) -> logging.Handler:
    """Configure the root logger and return the handler installed on it.

    Parameters
    ----------
    level:
        Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    storage:
        When given, every record is stamped with the current request id.
    json_logs:
        Emit JSON lines; otherwise a plain text format that still shows the id.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    root.handlers.clear()

    handler = logging.StreamHandler()
    if json_logs:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s")
        )
        if storage is None:
            # The text format needs the attribute even without a storage.
            handler.addFilter(_DefaultRequestIdFilter())
    if storage is not None:
        handler.addFilter(RequestIdLogFilter(storage))
    root.addHandler(handler)
    return handler


class _DefaultRequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = None
        return True
