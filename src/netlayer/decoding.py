"""Decoders -- turn response bytes into typed values.

A decoder is anything with ``decode(content, response_type)`` (:class:`Decoder`).
The pipeline does not mandate a wire format; it only wraps whatever the
decoder raises into :class:`~netlayer.exceptions.DecodingError`.

* :class:`JSONDecoder` -- the default. Validates JSON against any type
  pydantic understands: ``BaseModel`` subclasses, dataclasses,
  ``TypedDict``, ``dict``, ``list[Item]``, ``Any`` and so on.
* :class:`TextDecoder` -- returns the body as ``str``.
* :class:`AutoDecoder` -- JSON if possible, text otherwise.
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import TypeAdapter

T = TypeVar("T")


@runtime_checkable
class Decoder(Protocol):
    """Capability that parses raw response bytes into a requested type."""

    def decode(self, content: bytes, response_type: type[T]) -> T:
        """Decode *content* into an instance of *response_type*.

        Raises:
            Exception: Any parse or validation failure.
        """
        ...


@lru_cache(maxsize=256)
def _adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


class JSONDecoder:
    """Decode JSON payloads with a cached :class:`pydantic.TypeAdapter` per type.

    Example::

        class Item(BaseModel):
            id: int

        JSONDecoder().decode(b'{"id": 1}', Item)  # Item(id=1)
    """

    def decode(self, content: bytes, response_type: type[T]) -> T:
        return _adapter(response_type).validate_json(content)


class TextDecoder:
    """Decode the body as text; *response_type* must be ``str``."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def decode(self, content: bytes, response_type: type[T]) -> T:
        if response_type is not str:
            raise TypeError(f"TextDecoder can only produce str, not {response_type!r}")
        return content.decode(self.encoding)  # type: ignore[return-value]


class AutoDecoder:
    """Decode JSON when the body parses as JSON, text otherwise, ``None`` when empty.

    Intended for exploratory use (the ``netlayer`` CLI) where the payload
    shape is not known in advance; *response_type* is ignored.
    """

    def decode(self, content: bytes, response_type: Any = Any) -> Any:
        if not content:
            return None
        try:
            return json.loads(content)
        except ValueError:
            return content.decode("utf-8", errors="replace")
