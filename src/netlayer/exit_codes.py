"""Numeric process exit codes used by the ``netlayer`` command line.

Each constant maps to an error category and is referenced by the
corresponding :class:`~netlayer.exceptions.NetworkError` subclass, so shell
wrappers can tell failure classes apart without parsing stderr.

Example::

    $ netlayer request https://api.example.com/missing
    $ echo $?
    4   # EXIT_NOT_FOUND -- the server answered 404
"""

EXIT_SUCCESS = 0
"""The request completed and its body was decoded."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_AUTH_FAILURE = 3
"""A token could not be obtained, or the server answered 401/403."""

EXIT_NOT_FOUND = 4
"""The server answered HTTP 404."""

EXIT_HTTP_ERROR = 5
"""The server answered with a status outside 200..299."""

EXIT_NO_RESPONSE = 6
"""The transport failed before a response was received."""

EXIT_INVALID_URL = 7
"""The endpoint could not be turned into a valid absolute URL."""

EXIT_DECODING_ERROR = 8
"""The response body could not be decoded into the requested type."""
