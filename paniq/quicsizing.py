"""QUIC packet sizing under the obfuscated transport, and the proxy reply frame."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Optional

from .proxyproto import PROXY_VERSION, build_response_payload

MIN_QUIC_PAYLOAD = 1200
MAX_QUIC_PAYLOAD = 1452
IPV6_SAFE_PACKET = 1232
HEADER_SIZE = 4
LENGTH_PREFIX_SIZE = 2
COUNTER_SIZE = 8

_log = logging.getLogger(__name__)


def _overhead(s4: int, transport_replay: bool) -> int:
    overhead = s4 + HEADER_SIZE + LENGTH_PREFIX_SIZE
    if transport_replay:
        overhead += COUNTER_SIZE
    return overhead


def write_proxy_reply(writer: object, status: int, atyp: int, addr: bytes, port: int) -> bytes:
    """Write a proxy reply frame to writer and return the bytes sent."""
    frame = bytes([PROXY_VERSION]) + build_response_payload(status, atyp, addr, port)
    send = getattr(writer, "sendall", None) or getattr(writer, "write")
    send(frame)
    return frame


def initial_packet_size(
    max_packet: int,
    s4: int,
    transport_replay: bool = False,
    max_payload: int = 0,
) -> Optional[int]:
    """Return the fixed QUIC packet size to use, or None to keep QUIC's defaults.

    A size is returned only when the transport budget leaves room for a full
    QUIC payload; path MTU discovery should then be disabled.
    """
    budget = max_packet - _overhead(s4, transport_replay)
    if budget < MIN_QUIC_PAYLOAD:
        return None
    target = budget
    if 0 < max_payload < target:
        target = max_payload
    if target < MIN_QUIC_PAYLOAD:
        return None
    return min(target, MAX_QUIC_PAYLOAD)


@dataclass(frozen=True)
class TransportInfo:
    """Summary of how a packet budget is split between framing and payload."""

    max_packet: int
    max_payload: int
    effective_payload: int
    budget: int
    overhead: int
    s4: int
    replay: bool
    headroom: int
    mtu_ipv6_risk: bool

    def log(self, logger: Optional[logging.Logger] = None, **extra: object) -> None:
        """Emit the summary as one key=value info line."""
        fields = {**asdict(self), **extra}
        text = " ".join(f"{key}={value}" for key, value in fields.items())
        (logger or _log).info("transport config %s", text)


def transport_info(
    max_packet: int,
    max_payload: int,
    s4: int,
    transport_replay: bool = False,
) -> TransportInfo:
    """Compute the transport budget, effective payload and headroom."""
    overhead = _overhead(s4, transport_replay)
    budget = max_packet - overhead
    effective = budget
    if 0 < max_payload < effective:
        effective = max_payload
    return TransportInfo(
        max_packet=max_packet,
        max_payload=max_payload,
        effective_payload=effective,
        budget=budget,
        overhead=overhead,
        s4=s4,
        replay=transport_replay,
        headroom=budget - effective,
        mtu_ipv6_risk=max_packet > IPV6_SAFE_PACKET,
    )