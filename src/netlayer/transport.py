"""Transports -- the layer that physically sends a request.

A transport is anything with an ``async send(request) -> Response`` method
(:class:`Transport`). The pipeline never talks to the network itself; it hands
the finished :class:`~netlayer.models.Request` to the injected transport and
classifies whatever comes back.

:class:`HTTPXTransport` is the default, backed by :class:`httpx.AsyncClient`.
It performs exactly one HTTP exchange per :meth:`~HTTPXTransport.send` and
lets httpx errors propagate for the client to classify.

Example::

    async with HTTPXTransport(TransportConfig(timeout=10)) as transport:
        client = AsyncClient(transport)
        item = await client.request(endpoint, Item)
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from netlayer.models import CachePolicy, Request, Response, TransportConfig

_CACHE_CONTROL: dict[CachePolicy, str] = {
    CachePolicy.RELOAD_IGNORING_LOCAL_CACHE_DATA: "no-cache",
    CachePolicy.RETURN_CACHE_DATA_ELSE_LOAD: "max-stale",
    CachePolicy.RETURN_CACHE_DATA_DONT_LOAD: "only-if-cached",
}


@runtime_checkable
class Transport(Protocol):
    """Capability that executes a built request and returns the raw response."""

    async def send(self, request: Request) -> Response:
        """Send *request* and return status, body bytes and headers.

        Raises:
            Exception: Any transport-level failure (connection refused,
                timeout, DNS). The client classifies these as
                :class:`~netlayer.exceptions.NoResponseError`.
        """
        ...


def cache_headers(policy: Optional[CachePolicy]) -> dict[str, str]:
    """Translate a :class:`~netlayer.models.CachePolicy` hint into request headers."""
    if policy is None or policy not in _CACHE_CONTROL:
        return {}
    return {"Cache-Control": _CACHE_CONTROL[policy]}


class HTTPXTransport:
    """Default :class:`Transport` backed by :class:`httpx.AsyncClient`.

    Use as an async context manager, or call :meth:`aclose` when done. A
    transport used without entering the context opens its client lazily.

    Args:
        config: Timeout, TLS and default-header settings.
        client: A pre-built :class:`httpx.AsyncClient` to send through. The
            transport does not close a client it did not create.
    """

    def __init__(
        self,
        config: Optional[TransportConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = config or TransportConfig()
        self._client = client
        self._owns_client = client is None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> HTTPXTransport:
        self._ensure_client()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Transport protocol
    # ------------------------------------------------------------------ #

    async def send(self, request: Request) -> Response:
        """Perform one HTTP exchange for *request*.

        Request headers win over the cache-policy header and over the
        configured default headers.
        """
        client = self._ensure_client()
        headers = dict(request.headers)
        if not any(name.lower() == "cache-control" for name in headers):
            headers.update(cache_headers(request.cache_policy))

        kwargs: dict[str, Any] = {
            "method": request.method.value,
            "url": request.url,
            "headers": headers,
            "content": request.body,
        }
        if request.timeout is not None:
            kwargs["timeout"] = request.timeout

        response = await client.request(**kwargs)
        return Response(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._config.timeout,
                verify=self._config.verify_ssl,
                follow_redirects=self._config.follow_redirects,
                headers=self._config.headers,
            )
            self._owns_client = True
        return self._client
