"""HTTP client module for netlayer.

Provides the request execution pipeline: endpoint -> request -> token
attachment -> transport -> validation -> decoding.

Classes:
    :class:`Client` -- the protocol application code depends on.
    :class:`AsyncClient` -- the default implementation, composed of
    overridable steps.

Example::

    from netlayer.client import AsyncClient

    async with AsyncClient() as client:
        item = await client.request(endpoint, Item)
"""

from netlayer.client.async_client import AsyncClient
from netlayer.client.base import Client

__all__ = ["AsyncClient", "Client"]
