"""TAI64N timestamps with coarsened nanoseconds."""

from __future__ import annotations

import struct
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

TIMESTAMP_SIZE = 12
_BASE = 0x400000000000000A
_WHITENER_MASK = 0x1000000 - 1
_U64 = 1 << 64
_NS_PER_SEC = 1_000_000_000
_LAYOUT = struct.Struct(">QI")


@dataclass(frozen=True)
class Timestamp:
    """A 12-byte TAI64N label; byte order compares as time order."""

    data: bytes = bytes(TIMESTAMP_SIZE)

    def __post_init__(self) -> None:
        raw = bytes(self.data)
        if len(raw) != TIMESTAMP_SIZE:
            raise ValueError(f"timestamp must be {TIMESTAMP_SIZE} bytes, got {len(raw)}")
        object.__setattr__(self, "data", raw)

    def after(self, other: "Timestamp") -> bool:
        """Return True if this timestamp is strictly later than other."""
        return self.data > other.data

    @property
    def is_zero(self) -> bool:
        return self.data == bytes(TIMESTAMP_SIZE)

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        secs, nano = _LAYOUT.unpack(self.data)
        unix = (secs - _BASE) % _U64
        if unix >= _U64 // 2:
            unix -= _U64
        try:
            moment = datetime.fromtimestamp(unix, tz=timezone.utc)
            return str(moment + timedelta(microseconds=nano // 1000))
        except (OverflowError, OSError, ValueError):
            return f"{unix}s+{nano}ns"


def stamp(unix_ns: int) -> Timestamp:
    """Build a timestamp from nanoseconds since the Unix epoch."""
    secs, nano = divmod(unix_ns, _NS_PER_SEC)
    secs_field = (_BASE + secs) % _U64
    nano_field = nano & ~_WHITENER_MASK & 0xFFFFFFFF
    return Timestamp(_LAYOUT.pack(secs_field, nano_field))


def now() -> Timestamp:
    """Return the current time as a timestamp."""
    return stamp(time.time_ns())