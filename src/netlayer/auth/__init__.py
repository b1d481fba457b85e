"""Token-provider based authentication for netlayer.

The main entry points are:

- :class:`Token` -- a credential value bound to a header field.
- :class:`TokenProvider` -- abstract base class for credential sources, with
  ``get_token`` / ``fetch_token`` / ``refresh_token``.
- :class:`StaticTokenProvider` -- a fixed secret from ``env:``, ``file:`` or
  ``prompt`` sources.
- :class:`OAuth2ClientCredentialsProvider` -- client-credentials tokens with
  refresh-token renewal.

Typical usage::

    from netlayer.auth import StaticTokenProvider

    client = AsyncClient(transport, token_providers=[
        StaticTokenProvider.bearer("env:API_TOKEN"),
    ])
"""

from netlayer.auth.base import Token, TokenProvider
from netlayer.auth.oauth2 import OAuth2ClientCredentialsProvider
from netlayer.auth.static import StaticTokenProvider

__all__ = [
    "Token",
    "TokenProvider",
    "StaticTokenProvider",
    "OAuth2ClientCredentialsProvider",
]
