"""Length-prefixed transport payloads with optional counter and random padding."""

from __future__ import annotations

import secrets
import struct
from dataclasses import dataclass
from typing import Callable, Optional

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFFFFFF
_U64_LIMIT = 1 << 64
_COUNTER = struct.Struct(">Q")
_LENGTH = struct.Struct(">H")
COUNTER_SIZE = _COUNTER.size
LENGTH_SIZE = _LENGTH.size


class InvalidTransportPayload(ValueError):
    """Raised when a transport payload cannot be built or decoded."""

    def __init__(self, message: str = "invalid transport payload") -> None:
        super().__init__(message)


class ReplayRejected(ValueError):
    """Raised when a transport counter has already been seen."""

    def __init__(self, message: str = "replay rejected") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class PaddingPolicy:
    """Bounds for random transport padding, with an occasional larger burst."""

    pad_min: int = 0
    pad_max: int = 0
    burst_min: int = 0
    burst_max: int = 0
    burst_prob: float = 0.0

    @property
    def enabled(self) -> bool:
        return (
            self.pad_min > 0
            or self.pad_max > 0
            or self.burst_min > 0
            or self.burst_max > 0
            or self.burst_prob > 0
        )


def _should_burst(prob: float) -> bool:
    if prob <= 0:
        return False
    if prob >= 1:
        return True
    threshold = int(prob * _U32_MAX) & _U32_MAX
    return secrets.randbits(32) <= threshold


def _rand_range_int(low: int, high: int) -> int:
    if low > high:
        raise InvalidTransportPayload()
    if low == high:
        return low
    span = (high - low + 1) & _U32_MAX
    return low + secrets.randbits(32) % span


def select_padding_len(policy: PaddingPolicy, base_len: int, max_payload: int) -> tuple[int, bool]:
    """Pick a padding length for a payload; return (pad_len, clamped)."""
    if not policy.enabled:
        return 0, False
    low, high = policy.pad_min, policy.pad_max
    if policy.burst_prob > 0 and _should_burst(policy.burst_prob):
        low, high = policy.burst_min, policy.burst_max
    if high < low:
        raise InvalidTransportPayload()
    if high == 0 and low == 0:
        return 0, False
    pad_len = _rand_range_int(low, high)
    if base_len + pad_len > max_payload:
        pad_len = max_payload - base_len
        if pad_len < 0:
            raise InvalidTransportPayload()
        return pad_len, True
    return pad_len, False


def build_transport_payload(
    inner: bytes,
    policy: Optional[PaddingPolicy] = None,
    max_payload: int = 0,
    transport_replay: bool = False,
    counter: int = 0,
) -> tuple[bytes, int, bool]:
    """Frame inner data; return (payload, pad_len, clamped)."""
    inner = bytes(inner)
    if policy is None:
        policy = PaddingPolicy()
    if not inner or len(inner) > _U16_MAX:
        raise InvalidTransportPayload()
    counter_size = COUNTER_SIZE if transport_replay else 0
    base_len = counter_size + LENGTH_SIZE + len(inner)
    if base_len > max_payload:
        raise InvalidTransportPayload()
    pad_len, clamped = select_padding_len(policy, base_len, max_payload)
    header = b""
    if transport_replay:
        if not 0 <= counter < _U64_LIMIT:
            raise InvalidTransportPayload("transport counter out of range")
        header = _COUNTER.pack(counter)
    padding = secrets.token_bytes(pad_len) if pad_len > 0 else b""
    payload = header + _LENGTH.pack(len(inner)) + inner + padding
    return payload, pad_len, clamped


def decode_transport_payload(
    payload: bytes,
    transport_replay: bool = False,
    validate_counter: Optional[Callable[[int], bool]] = None,
) -> tuple[bytes, int]:
    """Extract inner data from a payload; return (inner, pad_len)."""
    data = bytes(payload)
    counter = 0
    if transport_replay:
        if len(data) < COUNTER_SIZE + LENGTH_SIZE:
            raise InvalidTransportPayload()
        (counter,) = _COUNTER.unpack_from(data)
        data = data[COUNTER_SIZE:]
    if len(data) < LENGTH_SIZE:
        raise InvalidTransportPayload()
    (inner_len,) = _LENGTH.unpack_from(data)
    body = data[LENGTH_SIZE:]
    if inner_len <= 0 or inner_len > len(body):
        raise InvalidTransportPayload()
    if transport_replay and validate_counter is not None and not validate_counter(counter):
        raise ReplayRejected()
    return body[:inner_len], len(body) - inner_len