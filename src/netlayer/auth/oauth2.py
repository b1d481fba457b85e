"""OAuth2 Client Credentials token provider.

This module provides :class:`OAuth2ClientCredentialsProvider`, which performs
the non-interactive Client Credentials grant (:rfc:`6749` section 4.4),
exchanging a ``client_id`` and ``client_secret`` for an access token at the
configured ``token_url``.

When the authorization server also issues a ``refresh_token``,
:meth:`~OAuth2ClientCredentialsProvider.refresh_token` renews the access
token with the Refresh Token grant (:rfc:`6749` section 6) instead of
repeating the client-credentials exchange.

Token expiry comes from ``expires_in``; tokens without one are assumed to
live for an hour.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from netlayer.auth.base import Token, TokenProvider
from netlayer.config import resolve_credential
from netlayer.exceptions import TokenError

logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_IN = 3600.0


class OAuth2ClientCredentialsProvider(TokenProvider):
    """Obtain ``Authorization: Bearer`` tokens from an OAuth2 token endpoint.

    Args:
        token_url: The authorization server's token endpoint.
        client_id_source: Credential source for the client id.
        client_secret_source: Credential source for the client secret.
        scopes: Scopes requested with every grant.
        http_client: Client used for token requests. When ``None`` a
            short-lived :class:`httpx.AsyncClient` is created per request.
        timeout: Timeout for token requests in seconds.
    """

    def __init__(
        self,
        token_url: str,
        client_id_source: str,
        client_secret_source: str,
        scopes: Optional[list[str]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ) -> None:
        super().__init__()
        self.token_url = token_url
        self.client_id_source = client_id_source
        self.client_secret_source = client_secret_source
        self.scopes = list(scopes or [])
        self._http_client = http_client
        self._timeout = timeout
        self._refresh_token: Optional[str] = None

    async def fetch_token(self) -> Token:
        """Run the client-credentials grant and store the new token.

        Raises:
            TokenError: If the token request fails or the response has no
                ``access_token``.
            ConfigError: If a client credential source cannot be resolved.
        """
        data = {"grant_type": "client_credentials", **self._client_credentials()}
        if self.scopes:
            data["scope"] = " ".join(self.scopes)
        return self._store(await self._request_token(data))

    async def refresh_token(self) -> Token:
        """Renew the token with the refresh-token grant, or refetch without one.

        Raises:
            TokenError: If the token request fails.
        """
        if self._refresh_token is None:
            return await self.fetch_token()

        data = {
            "grant_type": "refresh_token",
            "refresh_token": self._refresh_token,
            **self._client_credentials(),
        }
        return self._store(await self._request_token(data))

    def _client_credentials(self) -> dict[str, str]:
        return {
            "client_id": resolve_credential(self.client_id_source),
            "client_secret": resolve_credential(self.client_secret_source),
        }

    async def _request_token(self, data: dict[str, str]) -> dict[str, Any]:
        """POST *data* to the token endpoint and return the JSON response."""
        headers = {"Accept": "application/json"}
        try:
            if self._http_client is not None:
                response = await self._http_client.post(
                    self.token_url, data=data, headers=headers
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(self.token_url, data=data, headers=headers)
            response.raise_for_status()
            token_data = response.json()
        except httpx.HTTPStatusError as exc:
            raise TokenError(
                f"Token request failed with status {exc.response.status_code}: "
                f"{exc.response.text}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TokenError(f"Token request failed: {exc}") from exc
        except ValueError as exc:
            raise TokenError(f"Token response is not valid JSON: {exc}") from exc

        if not isinstance(token_data, dict) or "access_token" not in token_data:
            raise TokenError("Token response missing 'access_token' field")
        return token_data

    def _store(self, token_data: dict[str, Any]) -> Token:
        expires_in = token_data.get("expires_in")
        if expires_in is None:
            expires_in = DEFAULT_EXPIRES_IN
        try:
            lifetime = float(expires_in)
        except (TypeError, ValueError) as exc:
            raise TokenError(
                f"Token response has invalid 'expires_in': {expires_in!r}"
            ) from exc
        self.token = Token.bearer(token_data["access_token"], expires_in=lifetime)
        # Servers may omit refresh_token on renewal; keep the previous one then.
        if token_data.get("refresh_token"):
            self._refresh_token = token_data["refresh_token"]
        logger.debug("Obtained access token from %s", self.token_url)
        return self.token
