"""Request-scoped storage for the current request id.

Storage holds at most one id for the request being processed. The listener
only ever calls ``get_request_id`` / ``set_request_id``; the lifetime of the
slot is bounded by ``scope()``, which the host adapter (the middleware) enters
once per request.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

from request_id.exceptions import ConfigurationError


class RequestIdStorage(ABC):
    """Holds the id of the request currently being processed."""

    @abstractmethod
    def get_request_id(self) -> str | None:
        ...

    @abstractmethod
    def set_request_id(self, request_id: str) -> None:
        ...

    @contextmanager
    def scope(self) -> Iterator[None]:
        """Bound one request's lifetime.

        On exit the slot holds whatever it held on entry. Entering does not
        clear the slot, so a value seeded by an outer collaborator survives.
        Storages whose lifetime is managed elsewhere keep this no-op.
        """
        yield


class SimpleRequestIdStorage(RequestIdStorage):
    """A single plain slot.

    Only safe when one request is processed at a time per instance. Concurrent
    requests would overwrite each other's id, so ``create_storage`` does not
    offer it; it serves callers that drive the listener one request at a time
    and tests.
    """

    def __init__(self, request_id: str | None = None) -> None:
        self._request_id = request_id

    def get_request_id(self) -> str | None:
        return self._request_id

    def set_request_id(self, request_id: str) -> None:
        self._request_id = request_id

    @contextmanager
    def scope(self) -> Iterator[None]:
        previous = self._request_id
        try:
            yield
        finally:
            self._request_id = previous


class ContextVarRequestIdStorage(RequestIdStorage):
    """Storage backed by a ``ContextVar``.

    Each asyncio task sees its own copy of the context, so concurrent requests
    served by one event loop never share a slot. A value set before the
    downstream app is called is visible to the handler's task.
    """

    def __init__(self, name: str = "request_id") -> None:
        self._var: ContextVar[str | None] = ContextVar(name, default=None)

    def get_request_id(self) -> str | None:
        return self._var.get()

    def set_request_id(self, request_id: str) -> None:
        self._var.set(request_id)

    @contextmanager
    def scope(self) -> Iterator[None]:
        token = self._var.set(self._var.get())
        try:
            yield
        finally:
            self._var.reset(token)


def create_storage(name: str) -> RequestIdStorage:
    """Build a storage by its configured name.

    Only storages that keep one slot per request under concurrent handling
    are offered here. ``SimpleRequestIdStorage`` shares one slot between
    every request an instance serves, so it is never wired into an app.
    """
    if name == "context":
        return ContextVarRequestIdStorage()
    raise ConfigurationError(
        f"Unknown request id storage {name!r}",
        available=["context"],
    )
