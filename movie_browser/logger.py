"""Logging setup for the movie-browser CLI.

Views are printed on stdout, so log records always go to stderr.
"""

from __future__ import annotations

import logging
import os
import sys

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"
_HTTP_LOGGERS = ("httpx", "httpcore")


def resolve_level(level: str | int | None = None, verbose: int = 0) -> int:
    """Pick the log level from ``-v`` count, an explicit level, or ``LOG_LEVEL``."""
    if verbose > 0:
        return logging.DEBUG
    if isinstance(level, int):
        return level
    name = (level or os.environ.get("LOG_LEVEL") or "INFO").strip().upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str | int | None = None, verbose: int = 0) -> int:
    """Configure the root logger and return the level applied.

    httpx request lines stay hidden unless ``verbose`` is 2 or more.
    """
    resolved = resolve_level(level, verbose)
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
        root.addHandler(handler)
    root.setLevel(resolved)

    http_level = logging.DEBUG if verbose >= 2 else logging.WARNING
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
    return resolved


__all__ = ["resolve_level", "setup_logging"]
