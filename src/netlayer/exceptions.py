"""Exception hierarchy for netlayer.

Every failure of :meth:`~netlayer.client.AsyncClient.request` surfaces as a
subclass of :class:`NetworkError`, except errors raised by third-party token
providers, which propagate unchanged. Each class carries an ``exit_code``
from :mod:`netlayer.exit_codes` that the CLI entry point uses.

An empty response body has no dedicated error; the decoder's failure on it
surfaces as :class:`DecodingError`.

Subclass hierarchy::

    NetworkError (exit 1)
    +-- InvalidURLError   (exit 7)
    +-- ClientError       (exit 2)
    +-- NoResponseError   (exit 6)
    +-- GeneralError      (exit 5; 4 for 404, 3 for 401/403)
    +-- DecodingError     (exit 8)
    +-- TokenError        (exit 3)
    +-- ConfigError       (exit 1)
"""

from __future__ import annotations

from typing import Optional

from netlayer.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_DECODING_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_HTTP_ERROR,
    EXIT_INVALID_URL,
    EXIT_INVALID_USAGE,
    EXIT_NO_RESPONSE,
    EXIT_NOT_FOUND,
)


class NetworkError(Exception):
    """Base exception for all netlayer errors.

    Args:
        message: Human-readable description, or ``None`` when the error kind
            says everything there is to say.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: Optional[str] = None, exit_code: int | None = None):
        super().__init__(message or "")
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidURLError(NetworkError):
    """Raised when an endpoint's fields cannot form a well-formed absolute URL."""

    exit_code = EXIT_INVALID_URL


class ClientError(NetworkError):
    """Raised for client-side failures detected before dispatch.

    Reserved for custom clients that validate requests before sending them;
    the default pipeline never raises it. The original exception is kept on
    :attr:`error`.
    """

    exit_code = EXIT_INVALID_USAGE

    def __init__(self, message: Optional[str], error: BaseException):
        super().__init__(message)
        self.error = error


class NoResponseError(NetworkError):
    """Raised when the transport fails or returns something that is not a response."""

    exit_code = EXIT_NO_RESPONSE


class GeneralError(NetworkError):
    """Raised when the HTTP status code is outside ``200..299``.

    Only the numeric code is carried; the response body is never consulted.
    """

    exit_code = EXIT_HTTP_ERROR

    def __init__(self, status_code: int, message: Optional[str] = None):
        if status_code == 404:
            exit_code: int | None = EXIT_NOT_FOUND
        elif status_code in (401, 403):
            exit_code = EXIT_AUTH_FAILURE
        else:
            exit_code = None
        super().__init__(message, exit_code=exit_code)
        self.status_code = status_code

    def __str__(self) -> str:
        if self.message:
            return f"HTTP {self.status_code}: {self.message}"
        return f"HTTP {self.status_code}"


class DecodingError(NetworkError):
    """Raised when the response body cannot be decoded into the requested type.

    The decoder's exception is stored on :attr:`error` and chained as
    ``__cause__``.
    """

    exit_code = EXIT_DECODING_ERROR

    def __init__(self, message: Optional[str], error: BaseException):
        super().__init__(message)
        self.error = error

    def __str__(self) -> str:
        return f"{self.message or 'Decoding failed'}: {self.error}"


class TokenError(NetworkError):
    """Raised by the built-in token providers when a token cannot be obtained."""

    exit_code = EXIT_AUTH_FAILURE


class ConfigError(NetworkError):
    """Raised for configuration problems (unknown credential source, bad config file)."""

    exit_code = EXIT_GENERIC_FAILURE
