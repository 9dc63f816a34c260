"""Request id generators.

A generator produces a fresh opaque identifier on every call. The default is a
canonical UUID4 string; ``TokenGenerator`` returns a hex token from the
``secrets`` module for deployments that prefer a shorter, dash-free id.
"""

from __future__ import annotations

import secrets
import uuid
from abc import ABC, abstractmethod

from request_id.exceptions import ConfigurationError


class RequestIdGenerator(ABC):
    """Produces a new unique request id on every call."""

    @abstractmethod
    def generate(self) -> str:
        """Return a new identifier. Must never repeat within the process."""
        ...


class Uuid4Generator(RequestIdGenerator):
    """Generates random version-4 UUIDs in their canonical 36-char form."""

    def generate(self) -> str:
        return str(uuid.uuid4())


class TokenGenerator(RequestIdGenerator):
    """Generates ``2 * nbytes`` lowercase hex characters.

    Args:
        nbytes: Number of random bytes per token. 16 bytes gives the same
            entropy budget as a UUID4.
    """

    def __init__(self, nbytes: int = 16) -> None:
        if nbytes < 8:
            raise ConfigurationError(f"Token generator needs at least 8 bytes, got {nbytes}")
        self._nbytes = nbytes

    def generate(self) -> str:
        return secrets.token_hex(self._nbytes)


_GENERATORS: dict[str, type[RequestIdGenerator]] = {
    "uuid4": Uuid4Generator,
    "token": TokenGenerator,
}


def create_generator(name: str) -> RequestIdGenerator:
    """Build a generator by its configured name (``uuid4`` or ``token``)."""
    try:
        cls = _GENERATORS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown request id generator {name!r}",
            available=sorted(_GENERATORS),
        ) from None
    return cls()
