"""JSON configuration loading and duration strings."""

from __future__ import annotations

import json
import re
from os import PathLike
from pathlib import Path
from typing import Any, Union

_NS_PER_SEC = 1_000_000_000

_UNITS = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": _NS_PER_SEC,
    "m": 60 * _NS_PER_SEC,
    "h": 3600 * _NS_PER_SEC,
}

_COMPONENT = re.compile(r"(\d*)(?:\.(\d*))?([^\d.]*)")


class ConfigError(ValueError):
    """Raised when configuration cannot be read or parsed."""


def _parse_ns(text: str) -> int:
    body = text
    negative = False
    if body and body[0] in "+-":
        negative = body[0] == "-"
        body = body[1:]
    if body == "0":
        return 0
    if not body:
        raise ValueError("empty duration")
    total = 0
    pos = 0
    while pos < len(body):
        match = _COMPONENT.match(body, pos)
        whole, frac, unit = match.groups()
        if not whole and not frac:
            raise ValueError("missing number")
        if not unit:
            raise ValueError("missing unit")
        if unit not in _UNITS:
            raise ValueError(f"unknown unit {unit!r}")
        scale = _UNITS[unit]
        total += int(whole or 0) * scale
        if frac:
            total += int(frac) * scale // 10 ** len(frac)
        pos = match.end()
    return -total if negative else total


def parse_duration(text: str) -> float:
    """Parse a duration like "5s", "1h30m" or "1.5ms" into seconds; "" means zero."""
    if not isinstance(text, str):
        raise ConfigError(f"duration must be a string: got {type(text).__name__}")
    if text == "":
        return 0.0
    try:
        return _parse_ns(text) / _NS_PER_SEC
    except ValueError as exc:
        raise ConfigError(f'invalid duration "{text}": {exc}') from exc


def _with_fraction(value: int, digits: int) -> str:
    whole, frac = divmod(value, 10**digits)
    if not frac:
        return str(whole)
    return f"{whole}.{frac:0{digits}d}".rstrip("0")


def format_duration(seconds: float) -> str:
    """Render seconds in the compact form such as "2m0s" or "1.5ms"."""
    ns = round(seconds * _NS_PER_SEC)
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    u = abs(ns)
    if u < _NS_PER_SEC:
        if u < 1_000:
            return f"{sign}{u}ns"
        if u < 1_000_000:
            return f"{sign}{_with_fraction(u, 3)}\u00b5s"
        return f"{sign}{_with_fraction(u, 6)}ms"
    secs, frac = divmod(u, _NS_PER_SEC)
    out = _with_fraction((secs % 60) * _NS_PER_SEC + frac, 9) + "s"
    minutes = secs // 60
    if minutes:
        hours, mins = divmod(minutes, 60)
        out = f"{mins}m" + out
        if hours:
            out = f"{hours}h" + out
    return sign + out


def decode_json(data: Union[str, bytes]) -> Any:
    """Parse JSON configuration data."""
    try:
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as exc:
        raise ConfigError(f"decode config: {exc}") from exc


def load_json_file(path: Union[str, PathLike]) -> Any:
    """Read and parse a JSON configuration file."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise ConfigError(f"read config: {exc}") from exc
    return decode_json(data)