import pytest

from paniq.replay import ReplayFilter
from paniq.transport import (
    InvalidTransportPayload,
    PaddingPolicy,
    ReplayRejected,
    build_transport_payload,
    decode_transport_payload,
    select_padding_len,
)


def test_decode_transport_payload_valid():
    payload = bytes([0, 3]) + b"abc" + bytes([1, 2, 3, 4, 5])
    inner, pad = decode_transport_payload(payload, False, None)
    assert inner == b"abc"
    assert pad == 5


def test_decode_transport_payload_zero_len():
    with pytest.raises(InvalidTransportPayload):
        decode_transport_payload(bytes([0, 0]), False, None)


def test_decode_transport_payload_oversized_len():
    with pytest.raises(InvalidTransportPayload):
        decode_transport_payload(bytes([0, 5, 1, 2]), False, None)


def test_decode_transport_payload_replay_reject():
    payload = bytes([0, 0, 0, 0, 0, 0, 0, 1]) + bytes([0, 3]) + b"abc"
    with pytest.raises(ReplayRejected):
        decode_transport_payload(payload, True, lambda counter: False)


def test_decode_short_replay_payload():
    with pytest.raises(InvalidTransportPayload):
        decode_transport_payload(bytes(9), True, None)


def test_round_trip_without_padding():
    payload, pad, clamped = build_transport_payload(b"hello", PaddingPolicy(), 100)
    assert (pad, clamped) == (0, False)
    assert payload == bytes([0, 5]) + b"hello"
    assert decode_transport_payload(payload) == (b"hello", 0)


def test_counter_is_big_endian_prefix_and_replay_filter_rejects_repeat():
    payload, _, _ = build_transport_payload(b"data", PaddingPolicy(), 100, True, 7)
    assert payload[:8] == (7).to_bytes(8, "big")
    filt = ReplayFilter()
    inner, pad = decode_transport_payload(payload, True, filt.validate_counter)
    assert (inner, pad) == (b"data", 0)
    with pytest.raises(ReplayRejected):
        decode_transport_payload(payload, True, filt.validate_counter)


def test_fixed_padding_round_trip():
    policy = PaddingPolicy(pad_min=8, pad_max=8)
    payload, pad, clamped = build_transport_payload(b"abc", policy, 100)
    assert pad == 8
    assert clamped is False
    assert len(payload) == 2 + 3 + 8
    assert decode_transport_payload(payload) == (b"abc", 8)


def test_padding_clamps_to_max_payload():
    policy = PaddingPolicy(pad_min=50, pad_max=50)
    base = 2 + 3
    payload, pad, clamped = build_transport_payload(b"abc", policy, base + 10)
    assert pad == 10
    assert clamped is True
    assert len(payload) == base + 10


def test_burst_probability_one_uses_burst_bounds():
    policy = PaddingPolicy(pad_min=1, pad_max=1, burst_min=20, burst_max=20, burst_prob=1.0)
    assert select_padding_len(policy, 10, 1000) == (20, False)


def test_random_padding_stays_in_bounds():
    policy = PaddingPolicy(pad_min=4, pad_max=12)
    for _ in range(200):
        pad, clamped = select_padding_len(policy, 10, 1000)
        assert 4 <= pad <= 12
        assert clamped is False


def test_disabled_policy_returns_zero():
    assert PaddingPolicy().enabled is False
    assert select_padding_len(PaddingPolicy(), 10, 5) == (0, False)


def test_max_below_min_is_invalid():
    with pytest.raises(InvalidTransportPayload):
        select_padding_len(PaddingPolicy(pad_min=10, pad_max=5), 10, 1000)


def test_empty_inner_is_invalid():
    with pytest.raises(InvalidTransportPayload):
        build_transport_payload(b"", PaddingPolicy(), 100)


def test_base_exceeding_max_payload_is_invalid():
    with pytest.raises(InvalidTransportPayload):
        build_transport_payload(b"abcdef", PaddingPolicy(), 7)


def test_oversized_inner_is_invalid():
    with pytest.raises(InvalidTransportPayload):
        build_transport_payload(bytes(0x10000), PaddingPolicy(), 1 << 20)