"""Pytest configuration and fixtures.

Provides environment isolation, a fake Akismet service mounted through
``httpx.MockTransport``, and ready-made clients bound to it. No test touches
the network.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass, field
import os
from urllib.parse import parse_qsl

import httpx
import pytest

from akismet import Akismet, Comment

API_KEY = "123YourAPIKey"
BLOG = "https://www.example.com/"

THANKS = "Thanks for making the web a better place."

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class FakeAkismetService:
    """Stand-in for rest.akismet.com.

    Records every request and answers with the configured body, status and
    headers, or raises ``error`` to simulate a transport failure.
    """

    body: str = "true"
    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    error: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.body, headers=self.headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request reached the fake service"
        return self.requests[-1]

    @property
    def last_form(self) -> dict[str, str]:
        return dict(
            parse_qsl(self.last_request.content.decode("utf-8"), keep_blank_values=True)
        )

    @property
    def last_form_keys(self) -> list[str]:
        pairs = parse_qsl(
            self.last_request.content.decode("utf-8"), keep_blank_values=True
        )
        return [key for key, _ in pairs]

    def refuse_connections(self) -> None:
        self.error = httpx.ConnectError("[Errno 111] Connection refused")


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_akismet_env(monkeypatch):
    """Clear AKISMET_* env vars so credentials never leak between tests."""
    for key in list(os.environ.keys()):
        if key.startswith("AKISMET_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def service() -> FakeAkismetService:
    return FakeAkismetService()


@pytest.fixture
def akismet(service: FakeAkismetService):
    client = Akismet(API_KEY, BLOG, transport=service.transport)
    yield client
    client.close()


@pytest.fixture
def comment() -> Comment:
    return Comment(
        user_ip="127.0.0.1",
        user_agent="Mozilla/5.0 (Windows NT 10.0; Win64; x64)",
        content="It means a lot that you would take the time to review our software.",
    )
