"""Response validation and decoding -- the back half of the request pipeline.

After the transport returns, three checks run in order:

1. :func:`check_response` -- the transport really returned a
   :class:`~netlayer.models.Response`.
2. :func:`check_status_code` -- the status is in ``200..299``.
3. :func:`decode_data` -- the body decodes into the requested type.

Each raises a distinct :class:`~netlayer.exceptions.NetworkError` subclass
so callers can tell "nothing came back" from "the server said no" from "the
payload was not what we expected".
"""

from __future__ import annotations

from typing import Any, TypeVar

from netlayer.decoding import Decoder
from netlayer.exceptions import DecodingError, GeneralError, NoResponseError
from netlayer.models import Response

T = TypeVar("T")

SUCCESS_STATUS = range(200, 300)


def check_response(response: Any) -> Response:
    """Return *response* if it is a :class:`~netlayer.models.Response`.

    Raises:
        NoResponseError: For any other value, including ``None``.
    """
    if not isinstance(response, Response):
        raise NoResponseError(
            f"Transport returned {type(response).__name__}, not a Response"
        )
    return response


def check_status_code(response: Response) -> bool:
    """Check that the status code is within the success range ``200..299``.

    The body is never consulted: the raised error carries only the code.

    Returns:
        ``True`` for a successful status.

    Raises:
        GeneralError: For any status outside ``200..299``.
    """
    if response.status_code not in SUCCESS_STATUS:
        raise GeneralError(status_code=response.status_code)
    return True


def decode_data(content: bytes, response_type: type[T], decoder: Decoder) -> T:
    """Decode *content* into *response_type* with *decoder*.

    Raises:
        DecodingError: Wrapping whatever the decoder raised; the original
            exception is available as ``.error`` and ``__cause__``.
    """
    try:
        return decoder.decode(content, response_type)
    except Exception as exc:
        raise DecodingError("Can't decode data", error=exc) from exc
