"""Canonical Pydantic models shared across all netlayer modules.

This is the single source of truth for data shapes in the project. The models
fall into two groups:

**Pipeline models** -- the values that flow through a single call:
    :class:`Endpoint` (what to call), :class:`Request` (the transport-ready
    value built from it) and :class:`Response` (what the transport hands back).

**Vocabulary and configuration** -- :class:`URLScheme`, :class:`HTTPMethod`,
:class:`CachePolicy` and :class:`TransportConfig`.

Every pipeline model is frozen: once built it is never mutated, and the client
derives new values with :meth:`~pydantic.BaseModel.model_copy` instead.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Vocabulary ---


class URLScheme(str, enum.Enum):
    """URL scheme of an :class:`Endpoint`."""

    HTTPS = "https"
    HTTP = "http"


class HTTPMethod(str, enum.Enum):
    """HTTP request methods."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"


class CachePolicy(str, enum.Enum):
    """Opaque caching hint carried from an :class:`Endpoint` to the transport.

    The pipeline never interprets the hint. Transports decide what, if
    anything, each value means; :class:`~netlayer.transport.HTTPXTransport`
    translates it into a ``Cache-Control`` request header.
    """

    USE_PROTOCOL_CACHE_POLICY = "use_protocol_cache_policy"
    RELOAD_IGNORING_LOCAL_CACHE_DATA = "reload_ignoring_local_cache_data"
    RETURN_CACHE_DATA_ELSE_LOAD = "return_cache_data_else_load"
    RETURN_CACHE_DATA_DONT_LOAD = "return_cache_data_dont_load"


# --- Pipeline models ---


class Endpoint(BaseModel):
    """Declarative description of one logical network call.

    Only ``host`` is required. Subclasses may pin defaults for any field to
    describe a reusable endpoint::

        class ListItems(Endpoint):
            host: str = "api.example.com"
            path: str = "/items"

        endpoint = ListItems(query_parameters={"page": "2"})

    Attributes:
        scheme: URL scheme, ``https`` unless stated otherwise.
        host: Host name, optionally with ``:port``.
        path: Absolute URL path (``/items``) or empty.
        method: HTTP method.
        headers: Endpoint-specific request headers.
        query_parameters: Query items, encoded in insertion order.
        body: Raw request body.
        cache_policy: Caching hint for the transport.
        timeout: Per-request timeout in seconds.
    """

    model_config = ConfigDict(frozen=True)

    scheme: URLScheme = URLScheme.HTTPS
    host: str
    path: str = ""
    method: HTTPMethod = HTTPMethod.GET
    headers: Optional[dict[str, str]] = None
    query_parameters: Optional[dict[str, str]] = None
    body: Optional[bytes] = None
    cache_policy: Optional[CachePolicy] = None
    timeout: Optional[float] = Field(default=None, gt=0)


class Request(BaseModel):
    """Transport-ready request derived deterministically from an :class:`Endpoint`."""

    model_config = ConfigDict(frozen=True)

    url: str
    method: HTTPMethod
    headers: dict[str, str] = Field(default_factory=dict)
    body: Optional[bytes] = None
    cache_policy: Optional[CachePolicy] = None
    timeout: Optional[float] = None

    def with_headers(self, headers: dict[str, str]) -> Request:
        """Return a copy with *headers* merged in.

        Header names compare case-insensitively, so ``authorization`` from the
        endpoint is replaced by an ``Authorization`` override rather than sent
        twice.
        """
        overridden = {name.lower() for name in headers}
        merged = {
            name: value
            for name, value in self.headers.items()
            if name.lower() not in overridden
        }
        merged.update(headers)
        return self.model_copy(update={"headers": merged})


class Response(BaseModel):
    """Raw transport result: status code, body bytes and response headers."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    content: bytes = b""
    headers: dict[str, str] = Field(default_factory=dict)


# --- Configuration ---


class TransportConfig(BaseModel):
    """Settings for :class:`~netlayer.transport.HTTPXTransport`.

    Example::

        TransportConfig(timeout=10, headers={"User-Agent": "my-app/1.0"})
    """

    timeout: float = Field(default=30.0, gt=0, description="Default timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")
    follow_redirects: bool = True
    headers: dict[str, str] = Field(
        default_factory=dict, description="Headers sent with every request"
    )
