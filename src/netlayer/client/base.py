"""The public client contract.

:class:`Client` is what application code depends on; tests and alternative
implementations only need an ``async request(endpoint, response_type)``
method. :class:`~netlayer.client.async_client.AsyncClient` is the default
implementation.
"""

from __future__ import annotations

from typing import Protocol, Sequence, TypeVar, runtime_checkable

from netlayer.auth.base import TokenProvider
from netlayer.models import Endpoint
from netlayer.transport import Transport

T = TypeVar("T")


@runtime_checkable
class Client(Protocol):
    """A client that executes endpoints and returns decoded results."""

    @property
    def transport(self) -> Transport:
        """The transport requests are sent through."""
        ...

    @property
    def token_providers(self) -> Sequence[TokenProvider]:
        """Providers consulted, in order, for every request."""
        ...

    async def request(self, endpoint: Endpoint, response_type: type[T]) -> T:
        """Execute *endpoint* and decode the response body into *response_type*."""
        ...
