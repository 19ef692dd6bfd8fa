"""Go-Back-N sender and receiver."""

from __future__ import annotations

from collections import deque

from netsim.emulator import Entity, ReceiverProtocol, SenderProtocol
from netsim.packets import PAYLOAD_SIZE, Message, Packet, is_corrupted, make_packet

RTT = 16.0
WINDOW_SIZE = 6
SEQ_SPACE = 7
NOT_IN_USE = -1
_ACK_PAYLOAD = "0" * PAYLOAD_SIZE


def _log(network, level: int, text: str) -> None:
    if network.trace > level:
        print(text)


class GoBackNSender(SenderProtocol):
    """Sender keeping up to WINDOW_SIZE unacknowledged packets, all resent on timeout."""

    def __init__(self, network) -> None:
        self.network = network
        self.next_seqnum = 0
        self.window: deque[Packet] = deque()

    def output(self, message: Message) -> None:
        """Send a new message if the window has room, otherwise count it as dropped."""
        if len(self.window) >= WINDOW_SIZE:
            _log(self.network, 0, "----A: New message arrives, send window is full")
            self.network.stats.window_full += 1
            return

        _log(
            self.network,
            1,
            "----A: New message arrives, send window is not full, "
            "send new messge to layer3!",
        )
        packet = make_packet(self.next_seqnum, NOT_IN_USE, message.data)
        self.window.append(packet)

        _log(self.network, 0, f"Sending packet {packet.seqnum} to layer 3")
        self.network.to_layer3(Entity.A, packet)

        if len(self.window) == 1:
            self.network.start_timer(Entity.A, RTT)

        self.next_seqnum = (self.next_seqnum + 1) % SEQ_SPACE

    def input(self, packet: Packet) -> None:
        """Handle a cumulative acknowledgement from the receiver."""
        if is_corrupted(packet):
            _log(self.network, 0, "----A: corrupted ACK is received, do nothing!")
            return

        _log(self.network, 0, f"----A: uncorrupted ACK {packet.acknum} is received")
        self.network.stats.total_acks_received += 1

        if not self.window:
            _log(self.network, 0, "----A: duplicate ACK received, do nothing!")
            return

        first = self.window[0].seqnum
        last = self.window[-1].seqnum
        ack = packet.acknum
        if first <= last:
            in_window = first <= ack <= last
        else:
            in_window = ack >= first or ack <= last
        if not in_window:
            return

        _log(self.network, 0, f"----A: ACK {ack} is not a duplicate")
        self.network.stats.new_acks += 1

        if ack >= first:
            acked = ack + 1 - first
        else:
            acked = SEQ_SPACE - first + ack
        for _ in range(acked):
            self.window.popleft()

        self.network.stop_timer(Entity.A)
        if self.window:
            self.network.start_timer(Entity.A, RTT)

    def timer_interrupt(self) -> None:
        """Resend every packet in the window and restart the timer."""
        _log(self.network, 0, "----A: time out,resend packets!")
        for position, packet in enumerate(list(self.window)):
            _log(self.network, 0, f"---A: resending packet {packet.seqnum}")
            self.network.to_layer3(Entity.A, packet)
            self.network.stats.packets_resent += 1
            if position == 0:
                self.network.start_timer(Entity.A, RTT)


class GoBackNReceiver(ReceiverProtocol):
    """Receiver accepting only the expected packet and acknowledging cumulatively."""

    def __init__(self, network) -> None:
        self.network = network
        self.expected_seqnum = 0
        self.next_seqnum = 1

    def input(self, packet: Packet) -> None:
        """Deliver an in-order packet, then acknowledge the last one received in order."""
        if not is_corrupted(packet) and packet.seqnum == self.expected_seqnum:
            _log(
                self.network,
                0,
                f"----B: packet {packet.seqnum} is correctly received, send ACK!",
            )
            self.network.stats.packets_received += 1
            self.network.to_layer5(Entity.B, packet.payload)
            acknum = self.expected_seqnum
            self.expected_seqnum = (self.expected_seqnum + 1) % SEQ_SPACE
        else:
            _log(
                self.network,
                0,
                "----B: packet corrupted or not expected sequence number, resend ACK!",
            )
            acknum = (self.expected_seqnum - 1) % SEQ_SPACE

        ack = make_packet(self.next_seqnum, acknum, _ACK_PAYLOAD)
        self.next_seqnum = (self.next_seqnum + 1) % 2
        self.network.to_layer3(Entity.B, ack)

    def output(self, message: Message) -> None:
        """Count application data at B; transfer runs from A to B only."""
        _log(self.network, 1, "----B: message from application ignored")
        super().output(message)

    def timer_interrupt(self) -> None:
        """Count a timer expiry at B; the receiver keeps no timer."""
        _log(self.network, 1, "----B: timer interrupt ignored")
        super().timer_interrupt()