"""Asynchronous client -- the request execution pipeline.

This module provides :class:`AsyncClient`, the default
:class:`~netlayer.client.base.Client`. One :meth:`~AsyncClient.request` call
runs the whole pipeline, strictly in order:

1. build the :class:`~netlayer.models.Request` from the endpoint;
2. ask every token provider for a token, one after the other;
3. merge the token headers into the request, in provider order;
4. dispatch the request through the transport;
5. validate the response object and its status code;
6. decode the body into the requested type.

Any failure aborts the call. Nothing is retried and nothing is cached across
calls: the client owns no mutable state, so a single instance may serve
concurrent requests as long as its transport and providers can.

Each step is a method, so subclasses can replace one step (say, a decoder
per content type) without re-implementing the rest.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional, Sequence, TypeVar

import httpx

from netlayer.auth.base import Token, TokenProvider
from netlayer.client.response import check_response, check_status_code, decode_data
from netlayer.decoding import Decoder, JSONDecoder
from netlayer.exceptions import NetworkError, NoResponseError
from netlayer.models import Endpoint, Request, Response
from netlayer.output import get_output
from netlayer.request_builder import attach_tokens, build_request
from netlayer.transport import HTTPXTransport, Transport

T = TypeVar("T")


class AsyncClient:
    """Execute endpoints through an injectable transport and decode the results.

    Args:
        transport: Sends built requests. When ``None``, an
            :class:`~netlayer.transport.HTTPXTransport` with default settings
            is created and closed together with this client.
        token_providers: Providers asked for a token on every request, in
            order. Later providers win on header-field collisions.
        decoder: Turns response bytes into the requested type. Defaults to
            :class:`~netlayer.decoding.JSONDecoder`.

    Example::

        async with AsyncClient(token_providers=[provider]) as client:
            item = await client.request(
                Endpoint(host="api.example.com", path="/items/1"), Item
            )
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        token_providers: Sequence[TokenProvider] = (),
        decoder: Optional[Decoder] = None,
    ) -> None:
        self._owns_transport = transport is None
        self._transport: Transport = transport if transport is not None else HTTPXTransport()
        self._token_providers = tuple(token_providers)
        self._decoder = decoder or JSONDecoder()

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def token_providers(self) -> tuple[TokenProvider, ...]:
        return self._token_providers

    @property
    def decoder(self) -> Decoder:
        return self._decoder

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and isinstance(self._transport, HTTPXTransport):
            await self._transport.aclose()

    # ------------------------------------------------------------------ #
    # Public request method
    # ------------------------------------------------------------------ #

    async def request(self, endpoint: Endpoint, response_type: type[T]) -> T:
        """Execute *endpoint* and decode the response body into *response_type*.

        Args:
            endpoint: Description of the call.
            response_type: Any type the decoder can produce, e.g. a pydantic
                model, ``list[Item]`` or ``dict``.

        Returns:
            The decoded response body.

        Raises:
            InvalidURLError: The endpoint does not form a valid URL.
            NoResponseError: The transport failed or returned no response.
            GeneralError: The status code is outside ``200..299``.
            DecodingError: The body could not be decoded.
            Exception: Whatever a token provider raised, unchanged.
        """
        output = get_output()

        # 1. Request construction
        request = self.build_request(endpoint)

        # 2. Token collection -- all tokens are fetched before any merge
        tokens = await self.get_token_list()

        # 3. Token attachment
        request = self.apply_tokens(request, tokens)
        output.debug(
            f"{request.method.value} {request.url} "
            f"({len(tokens)} token(s), headers: {', '.join(request.headers) or 'none'})"
        )

        # 4. Dispatch
        raw = await self.send(request)

        # 5. Validation
        response = self.check_response(raw)
        output.debug(f"HTTP {response.status_code} ({len(response.content)} bytes)")
        self.check_status_code(response)

        # 6. Decoding
        return self.decode_data(response.content, response_type)

    # ------------------------------------------------------------------ #
    # Pipeline steps
    # ------------------------------------------------------------------ #

    def build_request(self, endpoint: Endpoint) -> Request:
        """Build the request for *endpoint*; see :func:`~netlayer.request_builder.build_request`."""
        return build_request(endpoint)

    async def get_token_list(self) -> list[Token]:
        """Ask each provider for its token, sequentially and in configured order.

        A provider failure propagates immediately; no partial token list is
        ever used.
        """
        tokens: list[Token] = []
        for provider in self._token_providers:
            tokens.append(await provider.get_token())
        return tokens

    def apply_tokens(self, request: Request, tokens: Sequence[Token]) -> Request:
        """Merge token headers into *request*; see :func:`~netlayer.request_builder.attach_tokens`."""
        return attach_tokens(request, tokens)

    async def send(self, request: Request) -> Any:
        """Dispatch *request* through the transport.

        Raises:
            NoResponseError: On any transport-level failure (connection,
                timeout, protocol error). Cancellation is not intercepted.
        """
        try:
            return await self._transport.send(request)
        except NetworkError:
            raise
        except (httpx.HTTPError, OSError, asyncio.TimeoutError) as exc:
            raise NoResponseError(f"No response from {request.url}: {exc}") from exc

    def check_response(self, response: Any) -> Response:
        return check_response(response)

    def check_status_code(self, response: Response) -> bool:
        return check_status_code(response)

    def decode_data(self, content: bytes, response_type: type[T]) -> T:
        return decode_data(content, response_type, self._decoder)
