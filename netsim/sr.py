"""Selective Repeat sender and receiver."""

from __future__ import annotations

from typing import Optional

from netsim.emulator import Entity, ReceiverProtocol, SenderProtocol
from netsim.packets import PAYLOAD_SIZE, Message, Packet, is_corrupted, make_packet

RTT = 16.0
WINDOW_SIZE = 6
SEQ_SPACE = 7
NOT_IN_USE = -1
_ACK_PAYLOAD = "0" * PAYLOAD_SIZE


class SelectiveRepeatSender(SenderProtocol):
    """Sender acknowledging packets individually and resending one at a time."""

    def __init__(self, network) -> None:
        self.network = network
        self.base = 0
        self.next_seqnum = 0
        self._buffer: list[Optional[Packet]] = [None] * SEQ_SPACE
        self._acknowledged = [False] * SEQ_SPACE
        self._timer_running = False

    def _in_flight(self, seq: int) -> bool:
        return (seq - self.base) % SEQ_SPACE < (self.next_seqnum - self.base) % SEQ_SPACE

    def _first_unacked(self) -> Optional[int]:
        return next(
            (
                seq
                for seq in range(SEQ_SPACE)
                if not self._acknowledged[seq] and self._in_flight(seq)
            ),
            None,
        )

    def _start_timer(self) -> None:
        self.network.start_timer(Entity.A, RTT)
        self._timer_running = True

    def output(self, message: Message) -> None:
        """Send a new message if the window has room, otherwise drop it."""
        if (self.next_seqnum - self.base) % SEQ_SPACE >= WINDOW_SIZE:
            if self.network.trace > 0:
                print("----A: Window full, message dropped")
            return

        packet = make_packet(self.next_seqnum, NOT_IN_USE, message.data)
        self._buffer[self.next_seqnum] = packet
        self._acknowledged[self.next_seqnum] = False
        self.network.to_layer3(Entity.A, packet)
        if not self._timer_running:
            self._start_timer()
        self.next_seqnum = (self.next_seqnum + 1) % SEQ_SPACE

    def input(self, packet: Packet) -> None:
        """Mark one packet acknowledged and slide the window past acknowledged ones."""
        if is_corrupted(packet):
            return
        acknum = packet.acknum
        if not 0 <= acknum < SEQ_SPACE or not self._in_flight(acknum):
            return

        self._acknowledged[acknum] = True
        while self._acknowledged[self.base]:
            self._acknowledged[self.base] = False
            self.base = (self.base + 1) % SEQ_SPACE

        if self._timer_running:
            self.network.stop_timer(Entity.A)
            self._timer_running = False
        if self._first_unacked() is not None:
            self._start_timer()

    def timer_interrupt(self) -> None:
        """Resend the first unacknowledged packet and restart the timer."""
        self._timer_running = False
        seq = self._first_unacked()
        if seq is None:
            return
        self.network.to_layer3(Entity.A, self._buffer[seq])
        self._start_timer()


class SelectiveRepeatReceiver(ReceiverProtocol):
    """Receiver buffering out-of-order packets and delivering them in order."""

    def __init__(self, network) -> None:
        self.network = network
        self.expected_seqnum = 0
        self._buffer: list[Optional[Packet]] = [None] * SEQ_SPACE
        self._received = [False] * SEQ_SPACE

    def input(self, packet: Packet) -> None:
        """Buffer the packet, deliver what is now in order, and acknowledge it."""
        if is_corrupted(packet):
            return
        seq = packet.seqnum
        if not 0 <= seq < SEQ_SPACE:
            return

        if not self._received[seq]:
            self._buffer[seq] = packet
            self._received[seq] = True

        while self._received[self.expected_seqnum]:
            self.network.to_layer5(Entity.B, self._buffer[self.expected_seqnum].payload)
            self._received[self.expected_seqnum] = False
            self.expected_seqnum = (self.expected_seqnum + 1) % SEQ_SPACE

        self.network.to_layer3(Entity.B, make_packet(0, seq, _ACK_PAYLOAD))

    def output(self, message: Message) -> None:
        """Count application data at B; transfer runs from A to B only."""
        if self.network.trace > 1:
            print("----B: message from application ignored")
        super().output(message)

    def timer_interrupt(self) -> None:
        """Count a timer expiry at B; the receiver keeps no timer."""
        if self.network.trace > 1:
            print("----B: timer interrupt ignored")
        super().timer_interrupt()