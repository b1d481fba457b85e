"""netlayer -- a small, swappable HTTP client pipeline.

Application code describes *what* a network call is with an
:class:`~netlayer.models.Endpoint`; :class:`~netlayer.client.AsyncClient`
handles *how* it runs: building the request, attaching tokens from
:class:`~netlayer.auth.TokenProvider` instances, dispatching through an
injectable :class:`~netlayer.transport.Transport`, validating the status and
decoding the body into a typed result.

Typical usage::

    from netlayer import AsyncClient, Endpoint
    from netlayer.auth import StaticTokenProvider

    async with AsyncClient(token_providers=[StaticTokenProvider.bearer("env:TOKEN")]) as client:
        item = await client.request(Endpoint(host="api.example.com", path="/items/1"), Item)

Modules:
    models: Pydantic models for endpoints, requests, responses and settings.
    request_builder: Endpoint to request conversion and token merging.
    auth: Tokens and token providers.
    transport: Transport protocol and the httpx-backed default.
    decoding: Decoder protocol and the built-in decoders.
    client: The request execution pipeline.
    exceptions: Error taxonomy with exit-code mapping.
    app: The ``netlayer`` command line.
"""

__version__ = "0.1.0"

from netlayer.client import AsyncClient, Client
from netlayer.exceptions import (
    ClientError,
    DecodingError,
    GeneralError,
    InvalidURLError,
    NetworkError,
    NoResponseError,
)
from netlayer.models import CachePolicy, Endpoint, HTTPMethod, Request, Response, URLScheme

__all__ = [
    "AsyncClient",
    "CachePolicy",
    "Client",
    "ClientError",
    "DecodingError",
    "Endpoint",
    "GeneralError",
    "HTTPMethod",
    "InvalidURLError",
    "NetworkError",
    "NoResponseError",
    "Request",
    "Response",
    "URLScheme",
]
