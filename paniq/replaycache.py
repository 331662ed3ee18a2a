"""Bounded LRU set of handshake replay keys."""

from __future__ import annotations

import hashlib
import struct
import threading
from collections import OrderedDict

DEFAULT_CAPACITY = 4096


class ReplayCache:
    """Remembers recent keys, evicting the least recently seen."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            capacity = DEFAULT_CAPACITY
        self.capacity = capacity
        self._entries: "OrderedDict[bytes, None]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: bytes) -> bool:
        with self._lock:
            return bytes(key) in self._entries

    def seen(self, key: bytes) -> tuple[bool, int]:
        """Mark key; return (already_present, number_evicted)."""
        key = bytes(key)
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                return True, 0
            self._entries[key] = None
            evicted = 0
            while len(self._entries) > self.capacity:
                self._entries.popitem(last=False)
                evicted += 1
            return False, evicted

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()


def replay_key(timestamp: int, payload: bytes, mac1: bytes = b"") -> bytes:
    """Derive the 32-byte replay key for a handshake."""
    payload_hash = hashlib.sha256(payload).digest()
    material = struct.pack(">I", timestamp & 0xFFFFFFFF) + payload_hash + bytes(mac1)
    return hashlib.sha256(material).digest()