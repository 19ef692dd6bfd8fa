"""Messages and packets exchanged between the transport layer and the network."""

from __future__ import annotations

from dataclasses import dataclass

PAYLOAD_SIZE = 20


def _check_length(text: str, what: str) -> None:
    if len(text) != PAYLOAD_SIZE:
        raise ValueError(
            f"{what} must be exactly {PAYLOAD_SIZE} characters, got {len(text)}"
        )


@dataclass(frozen=True)
class Message:
    """A unit of application data handed from layer 5 to layer 4."""

    data: str

    def __post_init__(self) -> None:
        _check_length(self.data, "message data")


@dataclass(frozen=True)
class Packet:
    """A unit handed from layer 4 to layer 3, with header fields and payload."""

    seqnum: int
    acknum: int
    checksum: int
    payload: str

    def __post_init__(self) -> None:
        _check_length(self.payload, "packet payload")


def compute_checksum(packet: Packet) -> int:
    """Sum of the sequence number, acknowledgement number and payload characters."""
    return packet.seqnum + packet.acknum + sum(map(ord, packet.payload))


def is_corrupted(packet: Packet) -> bool:
    """True when the stored checksum does not match the packet's contents."""
    return packet.checksum != compute_checksum(packet)


def make_packet(seqnum: int, acknum: int, payload: str) -> Packet:
    """Build a packet whose checksum matches its contents."""
    checksum = seqnum + acknum + sum(map(ord, payload))
    return Packet(seqnum=seqnum, acknum=acknum, checksum=checksum, payload=payload)