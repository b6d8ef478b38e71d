"""Logging setup for the command line."""

from __future__ import annotations

import logging

from .exceptions import ConfigError

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger; unknown level names raise :class:`ConfigError`."""

    name = level.upper()
    if name not in _LEVELS:
        raise ConfigError(f"Unknown log level {level!r}; expected one of {', '.join(_LEVELS)}")
    logging.basicConfig(level=getattr(logging, name), format=_LOG_FORMAT, force=True)
