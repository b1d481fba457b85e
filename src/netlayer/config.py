"""Configuration helpers: credential sources and transport settings.

The core pipeline reads no environment variables and no files. These helpers
serve the outer layers -- the built-in token providers and the CLI:

* **Credential resolution** -- :func:`resolve_credential` turns a source
  descriptor (``env:VAR``, ``file:/path``, ``prompt``) into a secret.
* **Transport settings** -- :func:`load_transport_config` reads a JSON file
  into a :class:`~netlayer.models.TransportConfig`.
"""

from __future__ import annotations

import getpass
import json
import os
import sys
from pathlib import Path

from pydantic import ValidationError

from netlayer.exceptions import ConfigError
from netlayer.models import TransportConfig


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - ``"prompt"`` -- prompts user interactively (requires a TTY)

    Args:
        source: The source descriptor string.

    Returns:
        The resolved credential string.

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError(
                "Cannot prompt for credentials: stdin is not a TTY (source: prompt)"
            )
        return getpass.getpass("Enter credential: ")

    raise ConfigError(f"Unknown credential source format: {source}")


def load_transport_config(path: str | Path) -> TransportConfig:
    """Load a :class:`~netlayer.models.TransportConfig` from a JSON file.

    Args:
        path: Location of the JSON document.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the file is missing, is not valid JSON, or fails
            validation.
    """
    path = Path(path).expanduser()
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc
    try:
        return TransportConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid transport config in {path}: {exc}") from exc
