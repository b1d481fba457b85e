"""Shared test fixtures for netlayer.

Provides in-memory transports and token providers so that pipeline tests
never touch the network, plus output-state management and a CLI runner.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import httpx
import pytest

from netlayer.auth.base import Token, TokenProvider
from netlayer.models import Request, Response
from netlayer.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# In-memory transport and providers
# ---------------------------------------------------------------------------


class FakeTransport:
    """Transport double that records requests and replays a canned result.

    Args:
        status_code: Status of the canned response.
        content: Body bytes of the canned response.
        raises: Exception raised from :meth:`send` instead of responding.
        result: Returned verbatim instead of a built :class:`Response`,
            for transports that misbehave.
    """

    _UNSET: Any = object()

    def __init__(
        self,
        status_code: int = 200,
        content: bytes = b"{}",
        raises: Optional[BaseException] = None,
        result: Any = _UNSET,
    ) -> None:
        self.status_code = status_code
        self.content = content
        self.raises = raises
        self.result = result
        self.requests: list[Request] = []

    async def send(self, request: Request) -> Any:
        self.requests.append(request)
        if self.raises is not None:
            raise self.raises
        if self.result is not FakeTransport._UNSET:
            return self.result
        return Response(status_code=self.status_code, content=self.content)

    @property
    def last_request(self) -> Request:
        return self.requests[-1]


class CountingProvider(TokenProvider):
    """Token provider that counts calls and hands out a fixed value.

    Args:
        header_field: Header the token targets.
        value: Token value; ``None`` produces a token that is never attached.
        token: Initial token held by the provider.
        raises: Exception raised from :meth:`fetch_token`.
    """

    def __init__(
        self,
        header_field: str = "Authorization",
        value: Optional[str] = "Bearer test-token",
        token: Optional[Token] = None,
        raises: Optional[BaseException] = None,
    ) -> None:
        super().__init__(token)
        self.header_field = header_field
        self.value = value
        self.raises = raises
        self.get_calls = 0
        self.fetch_calls = 0

    async def get_token(self) -> Token:
        self.get_calls += 1
        return await super().get_token()

    async def fetch_token(self) -> Token:
        self.fetch_calls += 1
        if self.raises is not None:
            raise self.raises
        self.token = Token(header_field=self.header_field, value=self.value)
        return self.token


@pytest.fixture
def fake_transport() -> FakeTransport:
    """A transport answering ``200 {}`` to every request."""
    return FakeTransport()


@pytest.fixture
def make_transport() -> type[FakeTransport]:
    """The :class:`FakeTransport` class, for tests needing a custom reply."""
    return FakeTransport


@pytest.fixture
def make_provider() -> type[CountingProvider]:
    """The :class:`CountingProvider` class."""
    return CountingProvider


@pytest.fixture
def mock_http() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Factory building an :class:`httpx.AsyncClient` backed by a handler function."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def verbose_output() -> OutputManager:
    """Install a plain, colourless, verbose OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
