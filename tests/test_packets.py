from dataclasses import replace

import pytest

from netsim.packets import (
    PAYLOAD_SIZE,
    Message,
    Packet,
    compute_checksum,
    is_corrupted,
    make_packet,
)


def test_payload_size_is_twenty():
    assert PAYLOAD_SIZE == 20
    assert len(Message("a" * 20).data) == PAYLOAD_SIZE
    with pytest.raises(ValueError):
        Message("a" * 19)
    with pytest.raises(ValueError):
        Message("a" * 21)


def test_message_rejects_wrong_length():
    with pytest.raises(ValueError):
        Message("short")


def test_message_keeps_data():
    assert Message("a" * 20).data == "a" * 20


def test_packet_rejects_wrong_length():
    with pytest.raises(ValueError):
        Packet(seqnum=0, acknum=-1, checksum=0, payload="x" * 21)


def test_make_packet_is_not_corrupted():
    packet = make_packet(3, -1, "b" * 20)
    assert not is_corrupted(packet)
    assert packet.checksum == compute_checksum(packet)


def test_make_packet_keeps_fields():
    packet = make_packet(5, 2, "c" * 20)
    assert (packet.seqnum, packet.acknum, packet.payload) == (5, 2, "c" * 20)


def test_payload_corruption_is_detected():
    packet = make_packet(0, -1, "a" * 20)
    damaged = replace(packet, payload="Z" + packet.payload[1:])
    assert is_corrupted(damaged)


@pytest.mark.parametrize("field", ["seqnum", "acknum"])
def test_header_corruption_is_detected(field):
    packet = make_packet(1, -1, "d" * 20)
    damaged = replace(packet, **{field: 999999})
    assert is_corrupted(damaged)


def test_checksum_grows_with_sequence_number():
    low = make_packet(1, 0, "e" * 20)
    high = make_packet(4, 0, "e" * 20)
    assert high.checksum - low.checksum == 3


def test_checksum_of_zero_header_equals_payload_sum():
    packet = make_packet(0, 0, "0" * 20)
    assert compute_checksum(packet) == compute_checksum(make_packet(0, 0, "0" * 20))
    assert compute_checksum(replace(packet, seqnum=1)) == packet.checksum + 1


def test_packets_are_immutable():
    packet = make_packet(0, 0, "f" * 20)
    with pytest.raises(AttributeError):
        packet.seqnum = 2
    assert packet.seqnum == 0
    assert not is_corrupted(packet)