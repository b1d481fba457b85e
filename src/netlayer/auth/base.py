"""Token and token-provider base types.

This module defines the two foundational types of the auth subsystem:

- :class:`Token` -- a credential value, the header field it belongs in, and
  its validity.
- :class:`TokenProvider` -- the abstract base class every credential source
  extends.

To implement a new provider, subclass :class:`TokenProvider` and implement
:meth:`~TokenProvider.fetch_token`. Override
:meth:`~TokenProvider.refresh_token` when renewing a token differs from
acquiring the first one (e.g. an OAuth2 refresh-token grant).

See Also:
    :mod:`netlayer.auth.static` and :mod:`netlayer.auth.oauth2` for the
    built-in providers.
"""

from __future__ import annotations

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, ConfigDict

# Tokens this close to expiry are treated as already expired.
EXPIRY_MARGIN = 30.0


class Token(BaseModel):
    """A credential unit: a header field, its value, and an optional expiry.

    A token with ``value=None`` is never attached to a request. Validity is
    derived: the token needs a non-empty value, must not have been
    invalidated, and must not be within :data:`EXPIRY_MARGIN` seconds of
    ``expires_at``.

    Example::

        token = Token.bearer("abc123", expires_in=3600)
        assert token.header_field == "Authorization"
        assert token.value == "Bearer abc123"
    """

    model_config = ConfigDict(frozen=True)

    header_field: str
    value: Optional[str] = None
    expires_at: Optional[float] = None
    revoked: bool = False

    @classmethod
    def bearer(
        cls,
        access_token: str,
        expires_in: Optional[float] = None,
        header_field: str = "Authorization",
    ) -> Token:
        """Build an ``Authorization: Bearer <access_token>`` token."""
        expires_at = time.time() + expires_in if expires_in is not None else None
        return cls(
            header_field=header_field,
            value=f"Bearer {access_token}",
            expires_at=expires_at,
        )

    @property
    def is_valid(self) -> bool:
        if self.revoked or not self.value:
            return False
        if self.expires_at is None:
            return True
        return time.time() < self.expires_at - EXPIRY_MARGIN

    def invalidate(self) -> Token:
        """Return a copy of this token that reports ``is_valid == False``."""
        return self.model_copy(update={"revoked": True})


class TokenProvider(ABC):
    """Stateful supplier of a single current :class:`Token`.

    The provider owns its token; clients only read the value returned by
    :meth:`get_token` while merging headers. Concurrent :meth:`get_token`
    calls on one provider are serialised so that at most one fetch is in
    flight.

    Subclasses that skip ``super().__init__()`` still work: the token
    defaults to ``None`` and the lock is created on first use.
    """

    token: Optional[Token] = None
    _lock: Optional[asyncio.Lock] = None

    def __init__(self, token: Optional[Token] = None) -> None:
        self.token = token
        self._lock = asyncio.Lock()

    async def get_token(self) -> Token:
        """Return the current token if valid, fetching a new one otherwise.

        Returns:
            A token, either the held one (no network activity) or the result
            of :meth:`fetch_token`.

        Raises:
            Exception: Whatever :meth:`fetch_token` raises.
        """
        if self._lock is None:
            self._lock = asyncio.Lock()
        async with self._lock:
            if self.token is not None and self.token.is_valid:
                return self.token
            self.token = await self.fetch_token()
            return self.token

    @abstractmethod
    async def fetch_token(self) -> Token:
        """Unconditionally obtain a brand-new token, store it and return it."""
        ...

    async def refresh_token(self) -> Token:
        """Obtain a new token using the current one as context.

        The default implementation simply fetches from scratch. Providers
        with a dedicated renewal flow should override this.
        """
        return await self.fetch_token()
