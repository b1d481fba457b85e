"""Turn an :class:`~netlayer.models.Endpoint` into a transport-ready :class:`~netlayer.models.Request`.

Every function here is pure: the same endpoint always yields the same URL and
the same request, field for field. Host and path casing are preserved exactly;
the path is percent-encoded only where RFC 3986 requires it, and query items
keep their insertion order.
"""

from __future__ import annotations

import re
from typing import Sequence
from urllib.parse import quote, urlencode

import httpx

from netlayer.auth.base import Token
from netlayer.exceptions import InvalidURLError
from netlayer.models import Endpoint, Request

# Characters allowed unescaped in a path. "%" is kept so that already
# percent-encoded paths pass through untouched.
_PATH_SAFE = "/:@!$&'()*+,;=-._~%"

_HOST_RE = re.compile(
    r"^(?P<name>\[[0-9A-Fa-f:.]+\]|[^\s/?#@\\\[\]:]+)(?::(?P<port>[^:]*))?$"
)


def _check_host(host: str) -> None:
    if not host:
        raise InvalidURLError("Invalid URL: host is empty")
    match = _HOST_RE.match(host)
    if match is None:
        raise InvalidURLError(f"Invalid URL: malformed host {host!r}")
    port = match.group("port")
    if port is not None and (not port.isdigit() or not 0 < int(port) <= 65535):
        raise InvalidURLError(f"Invalid URL: bad port in host {host!r}")


def _encode_path(path: str) -> str:
    if path and not path.startswith("/"):
        raise InvalidURLError(f"Invalid URL: path {path!r} must start with '/'")
    return quote(path, safe=_PATH_SAFE)


def build_url(endpoint: Endpoint) -> str:
    """Assemble the absolute URL ``scheme://host/path?query`` for *endpoint*.

    Args:
        endpoint: The endpoint to describe.

    Returns:
        The absolute URL string.

    Raises:
        InvalidURLError: If the host is empty or malformed, the path is not
            absolute, or the assembled string is not a parseable URL.
    """
    _check_host(endpoint.host)
    url = f"{endpoint.scheme.value}://{endpoint.host}{_encode_path(endpoint.path)}"
    if endpoint.query_parameters:
        query = urlencode(list(endpoint.query_parameters.items()), quote_via=quote)
        url = f"{url}?{query}"

    try:
        httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise InvalidURLError(f"Invalid URL: {url}") from exc
    return url


def build_request(endpoint: Endpoint) -> Request:
    """Build the :class:`~netlayer.models.Request` for *endpoint*.

    The request carries a copy of the endpoint headers, so merging tokens into
    it later never touches the endpoint.

    Raises:
        InvalidURLError: See :func:`build_url`.
    """
    return Request(
        url=build_url(endpoint),
        method=endpoint.method,
        headers=dict(endpoint.headers or {}),
        body=endpoint.body,
        cache_policy=endpoint.cache_policy,
        timeout=endpoint.timeout,
    )


def attach_tokens(request: Request, tokens: Sequence[Token]) -> Request:
    """Return a copy of *request* with every token's header merged in.

    Tokens are applied in order, so a later token overwrites an earlier one
    that targets the same header field. Tokens whose ``value`` is ``None``
    are skipped; the header is left absent rather than set to ``""``.
    """
    for token in tokens:
        if token.value is not None:
            request = request.with_headers({token.header_field: token.value})
    return request
