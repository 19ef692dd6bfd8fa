"""Discrete-event emulation of an unreliable network between two entities."""

from __future__ import annotations

import bisect
import random as _random
import warnings
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Optional

from netsim.packets import Message, Packet, PAYLOAD_SIZE


class Entity(IntEnum):
    """The two protocol endpoints."""

    A = 0
    B = 1

    @property
    def peer(self) -> "Entity":
        return Entity.B if self is Entity.A else Entity.A


class EventType(IntEnum):
    """Kinds of scheduled events."""

    TIMER_INTERRUPT = 0
    FROM_LAYER5 = 1
    FROM_LAYER3 = 2


@dataclass
class Event:
    """A scheduled occurrence at one entity."""

    time: float
    kind: EventType
    entity: Entity
    packet: Optional[Packet] = None


@dataclass
class Statistics:
    """Counters kept by the emulator and updated by the protocols."""

    window_full: int = 0
    total_acks_received: int = 0
    packets_resent: int = 0
    new_acks: int = 0
    packets_received: int = 0
    messages_delivered: int = 0
    packets_to_layer3: int = 0
    packets_lost: int = 0
    packets_corrupted: int = 0


@dataclass(frozen=True)
class SimulationConfig:
    """Parameters of a simulation run.

    ``corrupt_direction`` limits loss and corruption to packets sent by the
    given entity; ``None`` applies them in both directions.
    """

    messages: int
    mean_interarrival: float
    loss_prob: float = 0.0
    corrupt_prob: float = 0.0
    corrupt_direction: Optional[Entity] = None
    trace: int = 0
    bidirectional: bool = False

    def __post_init__(self) -> None:
        if self.messages < 0:
            raise ValueError("number of messages must not be negative")
        if self.mean_interarrival <= 0:
            raise ValueError("average time between messages must be > 0")
        for name in ("loss_prob", "corrupt_prob"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must lie in [0, 1], got {value}")


class SenderProtocol(ABC):
    """Transport entity at A."""

    @abstractmethod
    def output(self, message: Message) -> None:
        """Accept a message from the application for sending."""

    @abstractmethod
    def input(self, packet: Packet) -> None:
        """Handle a packet arriving from the network."""

    @abstractmethod
    def timer_interrupt(self) -> None:
        """Handle expiry of this entity's timer."""


class ReceiverProtocol(ABC):
    """Transport entity at B. Simplex receivers only handle arriving packets.

    Application data and timer expiries at B are not acted on; they are
    counted in ``ignored_messages`` and ``ignored_timeouts``.
    """

    ignored_messages: int = 0
    ignored_timeouts: int = 0

    @abstractmethod
    def input(self, packet: Packet) -> None:
        """Handle a packet arriving from the network."""

    def output(self, message: Message) -> None:
        """Count application data that a simplex receiver does not send."""
        self.ignored_messages += 1

    def timer_interrupt(self) -> None:
        """Count a timer expiry that a simplex receiver does not act on."""
        self.ignored_timeouts += 1


class Emulator:
    """Event-driven network carrying packets between A and B with loss and corruption."""

    def __init__(self, config: SimulationConfig, rng=None) -> None:
        self.config = config
        self.trace = config.trace
        self._rng = rng if rng is not None else _random.Random(9999)
        self._events: list[Event] = []
        self.stats = Statistics()
        self.time = 0.0
        self.messages_attempted = 0
        self.delivered: list[tuple[Entity, str]] = []
        self._check_generator()

    def _check_generator(self) -> None:
        average = sum(self.random() for _ in range(1000)) / 1000.0
        if not 0.25 <= average <= 0.75:
            raise RuntimeError(
                "random number generation is not uniform on [0, 1] as expected"
            )

    def random(self) -> float:
        """Draw a uniform number in [0, 1]."""
        value = self._rng.random()
        if self.trace > 3:
            print(f"RANDOM NUMBER GENERAION CALLED: {value:f}")
        return value

    def _insert(self, event: Event) -> None:
        if self.trace > 2:
            print(f"            INSERTEVENT: time is {self.time:f}")
            print(f"            INSERTEVENT: future time will be {event.time:f}")
        times = [e.time for e in self._events]
        index = bisect.bisect_left(times, event.time)
        self._events.insert(index, event)

    def _find_timer(self, entity: Entity) -> Optional[int]:
        return next(
            (
                index
                for index, event in enumerate(self._events)
                if event.kind is EventType.TIMER_INTERRUPT and event.entity == entity
            ),
            None,
        )

    def _generate_next_arrival(self) -> None:
        if self.trace > 2:
            print("          GENERATE NEXT ARRIVAL: creating new arrival")
        delay = self.config.mean_interarrival * self.random() * 2
        if self.config.bidirectional and self.random() > 0.5:
            entity = Entity.B
        else:
            entity = Entity.A
        self._insert(Event(self.time + delay, EventType.FROM_LAYER5, entity))

    def start_timer(self, entity: Entity, increment: float) -> bool:
        """Schedule a timer interrupt; warn and return False if one is already running."""
        entity = Entity(entity)
        if self.trace > 1:
            print(f"          START TIMER: starting timer at {self.time:f}")
        if self._find_timer(entity) is not None:
            warnings.warn(
                "attempt to start a timer that is already started",
                RuntimeWarning,
                stacklevel=2,
            )
            return False
        self._insert(Event(self.time + increment, EventType.TIMER_INTERRUPT, entity))
        return True

    def stop_timer(self, entity: Entity) -> bool:
        """Cancel a running timer; warn and return False if none was running."""
        entity = Entity(entity)
        if self.trace > 1:
            print(f"          STOP TIMER: stopping timer at {self.time:f}")
        index = self._find_timer(entity)
        if index is None:
            warnings.warn(
                "unable to cancel your timer. It wasn't running.",
                RuntimeWarning,
                stacklevel=2,
            )
            return False
        del self._events[index]
        return True

    def _affects(self, sender: Entity) -> bool:
        direction = self.config.corrupt_direction
        return direction is None or direction == sender

    def to_layer3(self, entity: Entity, packet: Packet) -> None:
        """Send a packet from ``entity`` into the network towards its peer."""
        entity = Entity(entity)
        self.stats.packets_to_layer3 += 1

        if self.random() < self.config.loss_prob and self._affects(entity):
            self.stats.packets_lost += 1
            if self.trace > 0:
                print("          TOLAYER3: packet being lost")
            return

        if self.trace > 2:
            print(
                f"          TOLAYER3: seq: {packet.seqnum}, ack {packet.acknum}, "
                f"check: {packet.checksum} {packet.payload}"
            )

        destination = entity.peer
        last_time = self.time
        for event in self._events:
            if event.kind is EventType.FROM_LAYER3 and event.entity == destination:
                last_time = event.time
        arrival = last_time + 1 + 9 * self.random()

        if self.random() < self.config.corrupt_prob and self._affects(entity):
            self.stats.packets_corrupted += 1
            choice = self.random()
            if choice < 0.75:
                packet = replace(packet, payload="Z" + packet.payload[1:])
            elif choice < 0.875:
                packet = replace(packet, seqnum=999999)
            else:
                packet = replace(packet, acknum=999999)
            if self.trace > 0:
                print("          TOLAYER3: packet being corrupted")

        if self.trace > 2:
            print("          TOLAYER3: scheduling arrival on other side")
        self._insert(Event(arrival, EventType.FROM_LAYER3, destination, packet))

    def to_layer5(self, entity: Entity, data: str) -> None:
        """Deliver data to the application at ``entity``."""
        entity = Entity(entity)
        if self.trace > 2:
            print(
                f"          TOLAYER5: data received by application at "
                f"{entity.name}: {data}"
            )
        self.stats.messages_delivered += 1
        self.delivered.append((entity, data))

    def pending_events(self) -> tuple[Event, ...]:
        """The scheduled events in the order they will fire."""
        return tuple(self._events)

    def _trace_event(self, event: Event) -> None:
        names = {
            EventType.TIMER_INTERRUPT: "timerinterrupt  ",
            EventType.FROM_LAYER5: "fromlayer5 ",
            EventType.FROM_LAYER3: "fromlayer3 ",
        }
        print(
            f"\nEVENT time: {event.time:f},  type: {int(event.kind)}, "
            f"{names[event.kind]} entity: {int(event.entity)}"
        )

    def _deliver_message(self, event: Event, sender, receiver) -> None:
        if self.messages_attempted >= self.config.messages:
            if self.trace > 2:
                print("          FROM_LAYER5: no more messages to send: ")
            return
        self._generate_next_arrival()
        letter = chr(ord("a") + self.messages_attempted % 26)
        message = Message(letter * PAYLOAD_SIZE)
        if self.trace > 2:
            print(f"          MAINLOOP: data given to student: {message.data}")
        self.messages_attempted += 1
        target = sender if event.entity == Entity.A else receiver
        target.output(message)

    def run(self, sender: SenderProtocol, receiver: ReceiverProtocol) -> Statistics:
        """Process events until none remain and return the statistics."""
        self._generate_next_arrival()
        while self._events:
            event = self._events.pop(0)
            if self.trace >= 2:
                self._trace_event(event)
            self.time = event.time
            target = sender if event.entity == Entity.A else receiver
            if event.kind is EventType.FROM_LAYER5:
                self._deliver_message(event, sender, receiver)
            elif event.kind is EventType.FROM_LAYER3:
                target.input(event.packet)
            else:
                target.timer_interrupt()
        return self.stats