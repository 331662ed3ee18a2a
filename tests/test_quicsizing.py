import io
import logging

import pytest

from paniq.quicsizing import (
    initial_packet_size,
    transport_info,
    write_proxy_reply,
)


class _Sock:
    def __init__(self):
        self.sent = []

    def sendall(self, data):
        self.sent.append(data)


def test_write_proxy_reply_wire_bytes():
    buf = io.BytesIO()
    frame = write_proxy_reply(buf, 0x00, 0x01, bytes([127, 0, 0, 1]), 8080)
    assert buf.getvalue() == b"\x01\x00\x01\x7f\x00\x00\x01\x1f\x90"
    assert frame == buf.getvalue()


def test_write_proxy_reply_failure_to_socket():
    sock = _Sock()
    frame = write_proxy_reply(sock, 0x01, 0x01, bytes(4), 0)
    assert sock.sent == [frame]
    assert frame[:3] == bytes([0x01, 0x01, 0x01])
    assert len(frame) == 3 + 4 + 2


def test_initial_packet_size_too_small_budget():
    assert initial_packet_size(1200, 0) is None


def test_initial_packet_size_clamped_to_max():
    assert initial_packet_size(2000, 0) == 1452


def test_initial_packet_size_uses_max_payload():
    assert initial_packet_size(1420, 20, False, 1300) == 1300


def test_initial_packet_size_small_max_payload_ignored():
    assert initial_packet_size(1420, 20, False, 1000) is None


def test_initial_packet_size_within_bounds():
    size = initial_packet_size(1420, 20)
    assert 1200 <= size <= 1452


def test_replay_counter_costs_eight_bytes():
    assert initial_packet_size(1420, 0, True) == initial_packet_size(1412, 0, False)


def test_transport_info_invariants():
    info = transport_info(1420, 1300, 20, False)
    assert info.effective_payload == 1300
    assert info.budget - info.effective_payload == info.headroom
    assert info.max_packet - info.overhead == info.budget
    assert info.s4 == 20
    assert info.replay is False


def test_transport_info_without_max_payload_has_no_headroom():
    info = transport_info(1420, 0, 20)
    assert info.headroom == 0
    assert info.effective_payload == info.budget


def test_transport_info_replay_overhead():
    plain = transport_info(1420, 0, 30, False)
    replay = transport_info(1420, 0, 30, True)
    assert replay.overhead - plain.overhead == 8
    assert replay.replay is True


@pytest.mark.parametrize("max_packet,risk", [(1232, False), (1233, True)])
def test_transport_info_ipv6_risk(max_packet, risk):
    assert transport_info(max_packet, 0, 0).mtu_ipv6_risk is risk


def test_transport_info_log(caplog):
    info = transport_info(1420, 0, 20)
    with caplog.at_level(logging.INFO, logger="paniq.quicsizing"):
        info.log(pad_min=16)
    assert "transport config" in caplog.text
    assert "max_packet=1420" in caplog.text
    assert "pad_min=16" in caplog.text