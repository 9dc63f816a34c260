"""Request id correlation listener.

The listener reacts to two lifecycle points of a request:

- ``on_request_start``: trust the inbound header, reuse an id already in
  storage, or generate a new one. The request headers are updated in place so
  downstream handlers can read the id.
- ``on_response_ready``: copy the stored id into the outbound header.

Precedence on the request path:
1. trusted, non-empty inbound header → stored as-is (overwrites storage)
2. id already in storage → written onto the request header
3. otherwise → generated, stored and written onto the request header

Nested (non-main) passes are ignored on both paths. Errors raised by the
storage or the generator are not caught here.
"""

from __future__ import annotations

import re
from collections.abc import MutableMapping
from dataclasses import dataclass

from request_id.exceptions import InvalidHeaderNameError
from request_id.generator import RequestIdGenerator
from request_id.storage import RequestIdStorage

# RFC 9110 field-name: 1*tchar
_HEADER_NAME = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def validate_header_name(name: str) -> str:
    """Return *name* unchanged if it is a valid HTTP field name."""
    if not isinstance(name, str) or not _HEADER_NAME.fullmatch(name):
        raise InvalidHeaderNameError(f"Invalid header name: {name!r}", header=name)
    return name


@dataclass(frozen=True)
class HeaderConfig:
    """Which headers carry the id and whether the inbound one is trusted."""

    request_header: str = "Request-Id"
    response_header: str = "Response-Id"
    trust_request_header: bool = True

    def __post_init__(self) -> None:
        validate_header_name(self.request_header)
        validate_header_name(self.response_header)


@dataclass
class RequestEvent:
    """A request reached the application.

    ``headers`` is the request's header mapping and is mutated in place.
    """

    headers: MutableMapping[str, str]
    is_main_request: bool = True


@dataclass
class ResponseEvent:
    """A response is about to be sent. ``headers`` are the response headers."""

    headers: MutableMapping[str, str]
    is_main_request: bool = True


class RequestIdListener:
    """Establishes the request id on the way in and echoes it on the way out.

    Args:
        config: Header names and the trust flag.
        storage: Request-scoped slot holding the current id.
        generator: Source of new ids when none is supplied.
    """

    def __init__(
        self,
        config: HeaderConfig,
        storage: RequestIdStorage,
        generator: RequestIdGenerator,
    ) -> None:
        self._config = config
        self._storage = storage
        self._generator = generator

    @property
    def config(self) -> HeaderConfig:
        return self._config

    @property
    def storage(self) -> RequestIdStorage:
        return self._storage

    @property
    def generator(self) -> RequestIdGenerator:
        return self._generator

    def on_request_start(self, event: RequestEvent) -> None:
        if not event.is_main_request:
            return

        header = self._config.request_header
        if self._config.trust_request_header:
            incoming = event.headers.get(header)
            if incoming:
                self._storage.set_request_id(incoming)
                return

        request_id = self._storage.get_request_id()
        if not request_id:
            request_id = self._generator.generate()
            self._storage.set_request_id(request_id)

        event.headers[header] = request_id

    def on_response_ready(self, event: ResponseEvent) -> None:
        if not event.is_main_request:
            return

        request_id = self._storage.get_request_id()
        if request_id:
            event.headers[self._config.response_header] = request_id
