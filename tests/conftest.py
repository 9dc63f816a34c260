"""Shared test fixtures, collaborator doubles and hypothesis strategies."""

from __future__ import annotations

import pytest
from hypothesis import strategies as st

from request_id.config.settings import RequestIdSettings
from request_id.generator import RequestIdGenerator
from request_id.listener import HeaderConfig, RequestIdListener
from request_id.storage import RequestIdStorage

REQUEST_HEADER = "Request-Id"
RESPONSE_HEADER = "Response-Id"


# ---------------------------------------------------------------------------
# Collaborator doubles
# ---------------------------------------------------------------------------


class RecordingStorage(RequestIdStorage):
    """In-memory storage that records every call made to it."""

    def __init__(self, request_id: str | None = None) -> None:
        self.request_id = request_id
        self.get_calls = 0
        self.set_calls: list[str] = []

    def get_request_id(self) -> str | None:
        self.get_calls += 1
        return self.request_id

    def set_request_id(self, request_id: str) -> None:
        self.set_calls.append(request_id)
        self.request_id = request_id


class SequenceGenerator(RequestIdGenerator):
    """Returns the given ids in order and counts calls."""

    def __init__(self, *ids: str) -> None:
        self._ids = list(ids)
        self.calls = 0

    def generate(self) -> str:
        self.calls += 1
        return self._ids.pop(0)


class FailingGenerator(RequestIdGenerator):
    def generate(self) -> str:
        raise RuntimeError("entropy source unavailable")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clear_request_id_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's REQUEST_ID_* variables out of the settings tests."""
    for name in (
        "REQUEST_ID_REQUEST_HEADER",
        "REQUEST_ID_RESPONSE_HEADER",
        "REQUEST_ID_TRUST_REQUEST_HEADER",
        "REQUEST_ID_GENERATOR",
        "REQUEST_ID_STORAGE",
        "REQUEST_ID_LOG_LEVEL",
        "REQUEST_ID_JSON_LOGS",
        "REQUEST_ID_ENABLE_LOG_FILTER",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> RequestIdSettings:
    return RequestIdSettings(
        request_header=REQUEST_HEADER,
        response_header=RESPONSE_HEADER,
    )


@pytest.fixture
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture
def generator() -> SequenceGenerator:
    return SequenceGenerator("def234")


@pytest.fixture
def listener(storage: RecordingStorage, generator: SequenceGenerator) -> RequestIdListener:
    return RequestIdListener(
        HeaderConfig(REQUEST_HEADER, RESPONSE_HEADER, trust_request_header=True),
        storage,
        generator,
    )


# ---------------------------------------------------------------------------
# Hypothesis strategies (reusable across property tests)
# ---------------------------------------------------------------------------

# Values a client could plausibly send in a request id header
header_safe_ids = st.from_regex(r"[A-Za-z0-9][A-Za-z0-9._:\-]{0,63}", fullmatch=True)

# RFC 9110 field names
header_names = st.from_regex(r"[A-Za-z][A-Za-z0-9\-]{0,30}", fullmatch=True)

# Strings containing at least one character not allowed in a field name
invalid_header_names = st.one_of(
    st.just(""),
    st.tuples(
        st.text(alphabet="abcXYZ-", max_size=10),
        st.sampled_from(list(' :()<>@,;"/[]?={}\t\n')),
        st.text(max_size=10),
    ).map("".join),
)
