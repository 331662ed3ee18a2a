"""Wire format of the proxy connect request and its reply."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Union

PROXY_VERSION = 0x01
DOMAIN_MAX_LEN = 0xFF

_PORT = struct.Struct(">H")

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class Status(IntEnum):
    """Reply status codes."""

    SUCCESS = 0x00
    FAILURE = 0x01
    BAD_REQUEST = 0x02


class AddrType(IntEnum):
    """Address type tags used in requests and replies."""

    IPV4 = 0x01
    DOMAIN = 0x03
    IPV6 = 0x04


class ProxyProtocolError(ValueError):
    """Raised when a request or address does not follow the protocol."""


@dataclass(frozen=True)
class Request:
    """A decoded connect request."""

    host: str
    port: int

    @property
    def address(self) -> str:
        """The target as "host:port", with IPv6 hosts in brackets."""
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


def _read_exact(reader: object, size: int) -> bytes:
    read = getattr(reader, "read", None) or getattr(reader, "recv")
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = read(remaining)
        if not chunk:
            raise EOFError(f"unexpected end of stream: wanted {size} bytes, got {size - remaining}")
        chunks.append(bytes(chunk))
        remaining -= len(chunk)
    return b"".join(chunks)


def _ip_text(ip: IPAddress) -> str:
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return str(ip.ipv4_mapped)
    return str(ip)


def read_address(reader: object, atyp: int) -> str:
    """Read the address body for the given type and return the host text."""
    if atyp == AddrType.IPV4:
        return _ip_text(ipaddress.IPv4Address(_read_exact(reader, 4)))
    if atyp == AddrType.IPV6:
        return _ip_text(ipaddress.IPv6Address(_read_exact(reader, 16)))
    if atyp == AddrType.DOMAIN:
        (length,) = _read_exact(reader, 1)
        return _read_exact(reader, length).decode("utf-8", errors="surrogateescape")
    raise ProxyProtocolError("unsupported address type")


def read_request(reader: object) -> Request:
    """Read a connect request: version, address type, address, port."""
    version, atyp = _read_exact(reader, 2)
    if version != PROXY_VERSION:
        raise ProxyProtocolError(f"unsupported proxy version: {version}")
    host = read_address(reader, atyp)
    (port,) = _PORT.unpack(_read_exact(reader, _PORT.size))
    return Request(host, port)


def build_response_payload(status: int, atyp: int, addr: bytes, port: int) -> bytes:
    """Encode a reply body: status, address type, address bytes, port."""
    return bytes([status, atyp]) + bytes(addr) + _PORT.pack(port & 0xFFFF)


def addr_to_reply(host: Union[str, IPAddress], port: int) -> tuple[AddrType, bytes, int]:
    """Turn a bound address into (address type, address bytes, port) for a reply."""
    if isinstance(host, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        ip: IPAddress = host
    else:
        if "%" in host:
            raise ProxyProtocolError("invalid ip address")
        try:
            ip = ipaddress.ip_address(host)
        except ValueError as exc:
            raise ProxyProtocolError("invalid ip address") from exc
    if not 0 <= port <= 0xFFFF:
        raise ProxyProtocolError(f"invalid port: {port}")
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    if isinstance(ip, ipaddress.IPv4Address):
        return AddrType.IPV4, ip.packed, port
    return AddrType.IPV6, ip.packed, port