"""Configuration providers for the Monoview environment.

The directive engine reads a handful of settings: the application base URL
and port for ``@assets``/``@images``, the static sub-paths those directives
point into, and the debug flag that controls inline error fragments.

Providers implement ``get(key, default=None)``:

- `DictConfig`: in-memory mapping (tests, embedding)
- `EnvConfig`: a ``.env`` file loaded with python-dotenv, falling back to
  the process environment

Example:
    >>> config = DictConfig({"APP_URL": "http://x", "APP_PORT": "8000"})
    >>> base_url(config)
    'http://x:8000'

"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

# Defaults of the original view layout
DEFAULT_APP_URL = "http://localhost"
DEFAULT_APP_PORT = "8000"
DEFAULT_PUBLIC_PATH = "src/view/public"
DEFAULT_IMAGES_PATH = "src/view/public/images"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class ConfigProvider(Protocol):
    """Structural type for configuration providers."""

    def get(self, key: str, default: Any = None) -> Any: ...


class DictConfig:
    """Configuration backed by a plain mapping."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values = dict(values or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)


class EnvConfig:
    """Configuration loaded from a dotenv file.

    Lookup order is: values in the dotenv file, then ``os.environ`` (unless
    ``use_os_environ=False``), then the caller's default. Quotes around
    values and ``#`` comments are handled by python-dotenv.

    A missing file is not an error; the process environment still applies.

    Example:
        >>> config = EnvConfig(".env")
        >>> config.get("APP_URL", "http://localhost")
        'https://example.test'
    """

    __slots__ = ("_path", "_use_os_environ", "_values")

    def __init__(self, path: str | Path = ".env", *, use_os_environ: bool = True):
        self._path = Path(path)
        self._use_os_environ = use_os_environ
        if self._path.is_file():
            self._values = {k: v for k, v in dotenv_values(self._path).items() if v is not None}
            logger.debug("Loaded %d settings from %s", len(self._values), self._path)
        else:
            self._values = {}
            logger.debug("No dotenv file at %s; using process environment", self._path)

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._values:
            return self._values[key]
        if self._use_os_environ:
            return os.environ.get(key, default)
        return default


def base_url(config: ConfigProvider) -> str:
    """Build ``APP_URL:APP_PORT`` with trailing slashes stripped.

    An empty ``APP_PORT`` omits the ``:port`` suffix.
    """
    url = str(config.get("APP_URL", DEFAULT_APP_URL) or DEFAULT_APP_URL).rstrip("/")
    port = str(config.get("APP_PORT", DEFAULT_APP_PORT) or "").strip()
    if port:
        url = f"{url}:{port}"
    return url.rstrip("/")


def is_truthy(value: Any) -> bool:
    """Interpret a config value as a boolean flag."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUTHY
