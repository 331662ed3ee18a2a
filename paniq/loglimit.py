"""Per-key token bucket that throttles repeated log lines."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Optional


@dataclass
class _Bucket:
    last: float
    tokens: float


class LogLimiter:
    """Allows one message per key per interval (seconds)."""

    def __init__(self, interval: float = 10.0) -> None:
        if interval <= 0:
            interval = 10.0
        self.interval = interval
        self._burst = 1.0
        self._buckets: dict[str, _Bucket] = {}
        self._lock = threading.Lock()

    def allow(self, key: str, now: Optional[float] = None) -> bool:
        """Return True if a message for key may be logged at time now."""
        if now is None:
            now = time.monotonic()
        with self._lock:
            state = self._buckets.get(key)
            if state is None:
                state = _Bucket(now, self._burst)
                self._buckets[key] = state
            elapsed = now - state.last
            state.last = now
            if elapsed > 0:
                state.tokens = min(state.tokens + elapsed / self.interval, self._burst)
            if state.tokens < 1:
                return False
            state.tokens -= 1
            return True