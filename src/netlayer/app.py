"""Typer application and CLI entry point for netlayer.

The ``netlayer`` command is a thin shell over the library: ``netlayer
request URL`` splits the URL into an :class:`~netlayer.models.Endpoint`,
runs it through :class:`~netlayer.client.AsyncClient` with the default
:class:`~netlayer.transport.HTTPXTransport`, and prints the decoded body via
:mod:`netlayer.output`.

Library errors map onto process exit codes through
:attr:`~netlayer.exceptions.NetworkError.exit_code`.

See Also:
    :mod:`netlayer.exit_codes` for the list of exit codes.
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
from pathlib import Path
from typing import Any, Optional
from urllib.parse import parse_qsl, urlsplit

import typer

from netlayer import __version__
from netlayer.exit_codes import EXIT_GENERIC_FAILURE
from netlayer.models import CachePolicy, Endpoint, HTTPMethod, URLScheme

app = typer.Typer(
    name="netlayer",
    help="Send HTTP requests through the netlayer client pipeline.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"netlayer {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Initialise the global output manager from the CLI flags."""
    from netlayer.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="[debug] %(name)s: %(message)s",
        )


# ------------------------------------------------------------------ #
# Argument parsing helpers
# ------------------------------------------------------------------ #


def _parse_header(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        raise typer.BadParameter(f"Header must look like 'Name: value', got {raw!r}")
    return name.strip(), value.strip()


def _parse_param(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise typer.BadParameter(f"Query parameter must look like 'key=value', got {raw!r}")
    return key, value


def endpoint_from_url(
    url: str,
    method: HTTPMethod = HTTPMethod.GET,
    headers: Optional[dict[str, str]] = None,
    params: Optional[dict[str, str]] = None,
    body: Optional[bytes] = None,
    timeout: Optional[float] = None,
    cache_policy: Optional[CachePolicy] = None,
) -> Endpoint:
    """Split an absolute URL into an :class:`~netlayer.models.Endpoint`.

    Query items already present in *url* come first; *params* are appended
    and override items with the same key.

    Raises:
        typer.BadParameter: If the scheme is not http(s) or the URL carries
            credentials.
    """
    parts = urlsplit(url)
    try:
        scheme = URLScheme(parts.scheme.lower())
    except ValueError:
        raise typer.BadParameter(f"Unsupported URL scheme in {url!r}") from None
    if "@" in parts.netloc:
        raise typer.BadParameter("Credentials in the URL are not supported; use --bearer")

    query = dict(parse_qsl(parts.query, keep_blank_values=True))
    query.update(params or {})

    return Endpoint(
        scheme=scheme,
        host=parts.netloc,
        path=parts.path,
        method=method,
        headers=headers or None,
        query_parameters=query or None,
        body=body,
        cache_policy=cache_policy,
        timeout=timeout,
    )


async def _execute(endpoint: Endpoint, providers: list[Any], config_path: Optional[Path]) -> Any:
    from netlayer.client import AsyncClient
    from netlayer.config import load_transport_config
    from netlayer.decoding import AutoDecoder
    from netlayer.transport import HTTPXTransport

    config = load_transport_config(config_path) if config_path else None
    async with HTTPXTransport(config) as transport:
        client = AsyncClient(transport, token_providers=providers, decoder=AutoDecoder())
        return await client.request(endpoint, Any)


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #


@app.command("request")
def request_command(
    url: str = typer.Argument(..., help="Absolute http(s) URL."),
    method: HTTPMethod = typer.Option(
        HTTPMethod.GET, "--method", "-X", case_sensitive=False, help="HTTP method."
    ),
    header: Optional[list[str]] = typer.Option(
        None, "--header", "-H", help="Request header as 'Name: value'. Repeatable."
    ),
    param: Optional[list[str]] = typer.Option(
        None, "--param", "-p", help="Query parameter as 'key=value'. Repeatable."
    ),
    data: Optional[str] = typer.Option(None, "--data", "-d", help="Raw request body."),
    bearer: Optional[str] = typer.Option(
        None, "--bearer", help="Bearer token source, e.g. env:API_TOKEN or file:~/.token."
    ),
    api_key: Optional[str] = typer.Option(
        None, "--api-key", help="API key source, sent in --api-key-header."
    ),
    api_key_header: str = typer.Option(
        "X-API-Key", "--api-key-header", help="Header carrying the API key."
    ),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Timeout in seconds."),
    no_cache: bool = typer.Option(False, "--no-cache", help="Ask caches to revalidate."),
    config: Optional[Path] = typer.Option(
        None, "--config", help="JSON file with transport settings."
    ),
) -> None:
    """Send one request and print the decoded response body."""
    from netlayer.auth import StaticTokenProvider
    from netlayer.exceptions import NetworkError
    from netlayer.output import error, format_response

    headers = dict(_parse_header(h) for h in header or [])
    params = dict(_parse_param(p) for p in param or [])

    # Providers run in this order, so an API key never displaces a bearer token.
    providers: list[Any] = []
    if api_key:
        providers.append(StaticTokenProvider.api_key(api_key, header=api_key_header))
    if bearer:
        providers.append(StaticTokenProvider.bearer(bearer))

    endpoint = endpoint_from_url(
        url,
        method=method,
        headers=headers,
        params=params,
        body=data.encode("utf-8") if data is not None else None,
        timeout=timeout,
        cache_policy=CachePolicy.RELOAD_IGNORING_LOCAL_CACHE_DATA if no_cache else None,
    )

    try:
        result = asyncio.run(_execute(endpoint, providers, config))
    except NetworkError as exc:
        error(str(exc))
        raise typer.Exit(exc.exit_code) from exc

    format_response(result)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``netlayer`` console script.

    Unexpected exceptions are reported on stderr and exit with
    :data:`~netlayer.exit_codes.EXIT_GENERIC_FAILURE`.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from netlayer.exceptions import NetworkError
        from netlayer.output import error

        if isinstance(exc, NetworkError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
