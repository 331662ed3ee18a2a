"""Extracting IP addresses from peer addresses."""

from __future__ import annotations

import ipaddress
from typing import Optional, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def _split_host(text: str) -> Optional[str]:
    if text.startswith("["):
        end = text.find("]")
        if end < 0 or text[end + 1 : end + 2] != ":":
            return None
        host = text[1:end]
        if "[" in host or "]" in text[end + 1 :]:
            return None
        return host
    host, sep, _ = text.rpartition(":")
    if not sep or ":" in host or "[" in host or "]" in host:
        return None
    return host


def addr_ip(address: object) -> Optional[IPAddress]:
    """Return the IP of a (host, port, ...) tuple or "host:port" string, or None."""
    if isinstance(address, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return address
    if isinstance(address, tuple):
        host = address[0] if address else None
    elif isinstance(address, str):
        host = _split_host(address)
    else:
        return None
    if not isinstance(host, str):
        return None
    try:
        return ipaddress.ip_address(host)
    except ValueError:
        return None