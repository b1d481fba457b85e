"""Static credential provider.

This module provides :class:`StaticTokenProvider`, which turns a
pre-existing secret -- a bearer token, an API key, any custom header value --
into a :class:`~netlayer.auth.base.Token`. The secret is resolved lazily from
a credential source (``env:MY_TOKEN``, ``file:~/.token``, ``prompt``) on the
first :meth:`~netlayer.auth.base.TokenProvider.get_token` call and reused
afterwards.

This provider does not perform any token exchange. For OAuth2-based token
acquisition, see :mod:`netlayer.auth.oauth2`.
"""

from __future__ import annotations

import logging
from typing import Optional

from netlayer.auth.base import Token, TokenProvider
from netlayer.config import resolve_credential
from netlayer.exceptions import TokenError

logger = logging.getLogger(__name__)


class StaticTokenProvider(TokenProvider):
    """Supply a fixed credential under a fixed header field.

    Either pass a ready :class:`~netlayer.auth.base.Token` or a credential
    ``source`` to resolve on demand.

    Args:
        header_field: Header the credential is sent in.
        source: Credential source descriptor, see
            :func:`~netlayer.config.resolve_credential`.
        prefix: Text prepended to the resolved secret (e.g. ``"Bearer "``).
        token: An initial token. While it stays valid, ``source`` is never read.

    Example::

        provider = StaticTokenProvider.bearer("env:API_TOKEN")
        token = await provider.get_token()
    """

    def __init__(
        self,
        header_field: str,
        source: Optional[str] = None,
        prefix: str = "",
        token: Optional[Token] = None,
    ) -> None:
        super().__init__(token)
        self.header_field = header_field
        self.source = source
        self.prefix = prefix

    @classmethod
    def bearer(cls, source: str) -> StaticTokenProvider:
        """Provider sending ``Authorization: Bearer <secret>``."""
        return cls("Authorization", source=source, prefix="Bearer ")

    @classmethod
    def api_key(cls, source: str, header: str = "X-API-Key") -> StaticTokenProvider:
        """Provider sending the raw secret in *header*."""
        return cls(header, source=source)

    async def fetch_token(self) -> Token:
        """Resolve the credential source and store the resulting token.

        Raises:
            TokenError: If no source is configured.
            ConfigError: If the source cannot be resolved.
        """
        if self.source is None:
            raise TokenError(
                f"No credential source configured for header '{self.header_field}'"
            )
        secret = resolve_credential(self.source)
        logger.debug(
            "Resolved credential for %s from %s source",
            self.header_field,
            self.source.split(":")[0],
        )
        self.token = Token(header_field=self.header_field, value=f"{self.prefix}{secret}")
        return self.token
