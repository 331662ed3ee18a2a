"""Per-address token-bucket rate limiter."""

from __future__ import annotations

import ipaddress
import threading
import time
from dataclasses import dataclass
from typing import Callable, Hashable

DEFAULT_PACKETS_PER_SECOND = 20
DEFAULT_PACKETS_BURSTABLE = 5
_NS_PER_SEC = 1_000_000_000
_GARBAGE_COLLECT_NS = _NS_PER_SEC


@dataclass
class _Entry:
    last_ns: int
    tokens: int


def _normalize(ip: Hashable) -> Hashable:
    if isinstance(ip, str):
        return ipaddress.ip_address(ip)
    return ip


class RateLimiter:
    """Token bucket keyed by IP address; clock returns nanoseconds."""

    def __init__(
        self,
        pps: int = DEFAULT_PACKETS_PER_SECOND,
        burst: int = DEFAULT_PACKETS_BURSTABLE,
        clock: Callable[[], int] = time.monotonic_ns,
    ) -> None:
        if pps <= 0:
            pps = DEFAULT_PACKETS_PER_SECOND
        if burst <= 0:
            burst = DEFAULT_PACKETS_BURSTABLE
        self.packet_cost = _NS_PER_SEC // pps
        self.max_tokens = self.packet_cost * burst
        self._clock = clock
        self._lock = threading.Lock()
        self._table: dict[Hashable, _Entry] = {}
        self._closed = False
        self._last_cleanup = clock()

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        with self._lock:
            return len(self._table)

    def __enter__(self) -> "RateLimiter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Stop limiting; every later packet is allowed."""
        with self._lock:
            self._closed = True
            self._table.clear()

    def _purge(self, now_ns: int) -> None:
        self._table = {
            key: entry
            for key, entry in self._table.items()
            if now_ns - entry.last_ns <= _GARBAGE_COLLECT_NS
        }
        self._last_cleanup = now_ns

    def cleanup(self) -> bool:
        """Drop idle entries; return True if the table is now empty."""
        with self._lock:
            self._purge(self._clock())
            return not self._table

    def allow(self, ip: Hashable) -> bool:
        """Return True if a packet from ip may pass."""
        key = _normalize(ip)
        with self._lock:
            if self._closed:
                return True
            now_ns = self._clock()
            if now_ns - self._last_cleanup >= _GARBAGE_COLLECT_NS:
                self._purge(now_ns)
            entry = self._table.get(key)
            if entry is None:
                self._table[key] = _Entry(now_ns, self.max_tokens - self.packet_cost)
                return True
            entry.tokens = min(entry.tokens + (now_ns - entry.last_ns), self.max_tokens)
            entry.last_ns = now_ns
            if entry.tokens > self.packet_cost:
                entry.tokens -= self.packet_cost
                return True
            return False