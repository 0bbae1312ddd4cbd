"""Shared test fixtures and hypothesis strategies for the client test suite."""

from __future__ import annotations

import os
from collections.abc import Callable

import httpx
import pytest
from hypothesis import strategies as st

from envelope_client.config.settings import ClientSettings
from envelope_client.integration.token_store import InMemoryTokenStore
from envelope_client.transport.request import HttpRequest

BASE_URL = "https://api.example.com/v1"

Handler = Callable[[httpx.Request], httpx.Response]


# ---------------------------------------------------------------------------
# Ensure required env vars are set for ClientSettings in tests
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _set_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set minimal env vars so ClientSettings can be instantiated in tests."""
    defaults = {
        "APP_API_PREFIX": BASE_URL,
    }
    for key, value in defaults.items():
        if key not in os.environ:
            monkeypatch.setenv(key, value)


# ---------------------------------------------------------------------------
# Collaborator doubles
# ---------------------------------------------------------------------------

class RecordingNotifier:
    """Notifier that records ``(kind, text)`` pairs instead of displaying them."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def success(self, text: str) -> None:
        self.messages.append(("success", text))

    def error(self, text: str) -> None:
        self.messages.append(("error", text))

    def info(self, text: str) -> None:
        self.messages.append(("info", text))

    def of(self, kind: str) -> list[str]:
        return [text for k, text in self.messages if k == kind]


def envelope_response(
    data: object = None,
    *,
    success: bool = True,
    code: int = 0,
    message: str | None = None,
    status_code: int = 200,
) -> httpx.Response:
    body: dict = {"success": success, "code": code, "data": data}
    if message is not None:
        body["message"] = message
    return httpx.Response(status_code, json=body)


def build_client(
    handler: Handler,
    notifier: RecordingNotifier,
    token_store: InMemoryTokenStore | None = None,
    **kwargs: object,
) -> HttpRequest:
    return HttpRequest(
        BASE_URL,
        notifier=notifier,
        token_store=token_store,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> ClientSettings:
    """Test settings with safe defaults."""
    return ClientSettings(api_prefix=BASE_URL, timeout_seconds=5)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def token_store() -> InMemoryTokenStore:
    return InMemoryTokenStore({"access_token": "tok-123"})


@pytest.fixture
def make_client(
    notifier: RecordingNotifier, token_store: InMemoryTokenStore
) -> Callable[..., HttpRequest]:
    """Factory building an HttpRequest backed by an httpx.MockTransport handler."""

    def _make(handler: Handler, **kwargs: object) -> HttpRequest:
        return build_client(handler, notifier, token_store, **kwargs)

    return _make


# ---------------------------------------------------------------------------
# Hypothesis strategies (reusable across property tests)
# ---------------------------------------------------------------------------

# JSON-compatible payloads carried in an envelope's data field
json_scalars = st.none() | st.booleans() | st.integers(-10**6, 10**6) | st.text(max_size=20)
json_payloads = st.recursive(
    json_scalars,
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(min_size=1, max_size=8), children, max_size=4),
    max_leaves=10,
)

server_codes = st.integers(min_value=1, max_value=99999)
server_messages = st.text(
    min_size=1, max_size=40, alphabet="abcdefghijklmnopqrstuvwxyz0123456789 ._-"
)
