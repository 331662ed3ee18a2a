# paniq

Building blocks for an obfuscated UDP transport that carries QUIC traffic to a
proxy server: replay protection, per-address rate limiting, padded transport
payloads, encrypted handshake timestamps, the proxy request/reply wire format
and QUIC packet sizing.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module                 | What it provides                                                              |
|------------------------|-------------------------------------------------------------------------------|
| `paniq.replay`         | `ReplayFilter`, a sliding-window filter that rejects replayed counters        |
| `paniq.tai64n`         | `Timestamp`, `stamp(unix_ns)` and `now()` for TAI64N timestamps               |
| `paniq.ratelimiter`    | `RateLimiter`, a per-IP token bucket with an injectable nanosecond clock      |
| `paniq.metrics`        | `Counter`, `Gauge` and `LatencySampler` (samples in seconds)                  |
| `paniq.config`         | `parse_duration`, `format_duration`, `decode_json`, `load_json_file`, `ConfigError` |
| `paniq.logger`         | `setup(level)` to configure key=value logging on stderr                       |
| `paniq.loglimit`       | `LogLimiter`, one message per key per interval                                |
| `paniq.replaycache`    | `ReplayCache` (bounded LRU set) and `replay_key()`                            |
| `paniq.transport`      | padded transport payload encoding with `PaddingPolicy`                        |
| `paniq.enctimestamp`   | encrypted handshake timestamps over X25519 and XChaCha20-Poly1305             |
| `paniq.netaddr`        | `addr_ip()` to extract an IP address from a peer address                      |
| `paniq.proxyproto`     | the proxy connect request and reply wire format                               |
| `paniq.quicsizing`     | QUIC packet sizing, transport budget summary and `write_proxy_reply()`        |

### Replay protection

```python
from paniq.replay import ReplayFilter

window = ReplayFilter()
assert window.validate_counter(5)
assert not window.validate_counter(5)  # duplicate is rejected
```

`validate_counter(counter, limit)` also rejects counters at or above `limit`
(by default `REJECT_AFTER_MESSAGES`) and counters that fall behind the window.

### Rate limiting

```python
from paniq.ratelimiter import RateLimiter

with RateLimiter(pps=50, burst=20) as limiter:
    allowed = limiter.allow("192.0.2.1")
```

After `close()`, every packet is allowed.

### Transport payloads

```python
from paniq.transport import (
    PaddingPolicy,
    build_transport_payload,
    decode_transport_payload,
)

policy = PaddingPolicy(pad_min=16, pad_max=64)
payload, pad_len, clamped = build_transport_payload(b"hello", policy, 1200, False, 0)
inner, pad = decode_transport_payload(payload, False, None)
assert inner == b"hello"
assert pad == pad_len
```

With `transport_replay=True` an 8-byte big-endian counter precedes the length
prefix, and `decode_transport_payload` passes it to `validate_counter`.
Malformed payloads raise `InvalidTransportPayload`; a counter rejected by the
check raises `ReplayRejected`.

### Encrypted timestamps

```python
import os
from paniq.enctimestamp import (
    build_encrypted_timestamp_payload,
    derive_public_key,
    parse_encrypted_timestamp_payload,
)

server_priv = os.urandom(32)
server_pub = derive_public_key(server_priv)
payload = build_encrypted_timestamp_payload(server_pub)
timestamp = parse_encrypted_timestamp_payload(payload, server_priv)
```

`parse_encrypted_timestamp_payload` returns `None` when the payload is too
short or has the wrong version byte; a payload that looks like an encrypted
timestamp but fails to open raises `TimestampDecryptError`.

### Proxy wire format

`paniq.proxyproto.read_request(reader)` reads a version byte, an address type
(`AddrType.IPV4`, `AddrType.DOMAIN`, `AddrType.IPV6`), the address and a
big-endian port from anything with `read` or `recv`, and returns a `Request`
whose `address` is `"host:port"`. Protocol violations raise
`ProxyProtocolError`; a short stream raises `EOFError`.
`paniq.quicsizing.write_proxy_reply` writes the matching reply frame.

### QUIC sizing

`initial_packet_size(max_packet, s4, transport_replay, max_payload)` returns
the fixed QUIC packet size (between 1200 and 1452) to use when the packet
budget allows one, or `None`. `transport_info(...)` returns a `TransportInfo`
with the overhead, budget, effective payload and headroom, and can log itself.

## What this package does not do

It provides the pieces only. There is no command-line tool, no running proxy
server or client, no QUIC stack, no header-obfuscation framer and no socket
relaying loop; an application has to combine these modules with its own
networking code.