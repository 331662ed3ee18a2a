"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_FORMAT = "time=%(asctime)s level=%(levelname)s msg=%(message)s"


def setup(level: str) -> int:
    """Install a key=value stderr handler at the named level and return it."""
    resolved = _LEVELS.get((level or "").strip().lower(), logging.INFO)
    logging.basicConfig(level=resolved, format=_FORMAT, stream=sys.stderr, force=True)
    return resolved