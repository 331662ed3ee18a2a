"""Thread-safe counters, gauges and a latency sampler."""

from __future__ import annotations

import math
import threading
from typing import Iterable


class Counter:
    """Monotonic metric counter."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def add(self, n: int = 1) -> None:
        with self._lock:
            self._value += n

    def load(self) -> int:
        with self._lock:
            return self._value


class Gauge:
    """Metric that goes up and down."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def inc(self) -> None:
        with self._lock:
            self._value += 1

    def dec(self) -> None:
        with self._lock:
            self._value -= 1

    def set(self, value: int) -> None:
        with self._lock:
            self._value = value

    def load(self) -> int:
        with self._lock:
            return self._value


class LatencySampler:
    """Keeps the most recent latency samples (in seconds) for percentiles."""

    def __init__(self, size: int = 128) -> None:
        if size <= 0:
            size = 128
        self._samples = [0.0] * size
        self._index = 0
        self._full = False
        self._lock = threading.Lock()

    def add(self, seconds: float) -> None:
        with self._lock:
            self._samples[self._index] = seconds
            self._index += 1
            if self._index >= len(self._samples):
                self._index = 0
                self._full = True

    def _stored(self) -> list[float]:
        return self._samples if self._full else self._samples[: self._index]

    def snapshot_quantiles(self, quantiles: Iterable[float]) -> dict[float, float]:
        """Return the sample at each requested quantile."""
        with self._lock:
            values = sorted(self._stored())
        if not values:
            return {}
        count = len(values)
        results: dict[float, float] = {}
        for q in quantiles:
            if q <= 0:
                results[q] = values[0]
            elif q >= 1:
                results[q] = values[-1]
            else:
                pos = min(max(math.ceil(q * count) - 1, 0), count - 1)
                results[q] = values[pos]
        return results

    def sample_count(self) -> int:
        with self._lock:
            return len(self._samples) if self._full else self._index