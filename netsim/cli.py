"""Command-line front end running a protocol through the network emulator."""

from __future__ import annotations

import argparse

from netsim.emulator import Emulator, Entity, SimulationConfig, Statistics
from netsim.gbn import GoBackNReceiver, GoBackNSender
from netsim.sr import SelectiveRepeatReceiver, SelectiveRepeatSender

PROTOCOLS = {
    "gbn": (GoBackNSender, GoBackNReceiver),
    "sr": (SelectiveRepeatSender, SelectiveRepeatReceiver),
}

_DIRECTIONS = {0: Entity.A, 1: Entity.B, 2: None}

_BANNER = "-----  Stop and Wait Network Simulator Version 1.1 -------- \n"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the simulator."""
    parser = argparse.ArgumentParser(
        prog="netsim",
        description="Simulate a reliable transport protocol over a lossy network.",
    )
    parser.add_argument(
        "-n", "--messages", type=int, required=True,
        help="number of messages to simulate",
    )
    parser.add_argument(
        "-l", "--loss", type=float, default=0.0,
        help="packet loss probability (0.0 for no loss)",
    )
    parser.add_argument(
        "-c", "--corrupt", type=float, default=0.0,
        help="packet corruption probability (0.0 for no corruption)",
    )
    parser.add_argument(
        "-d", "--direction", type=int, choices=sorted(_DIRECTIONS), default=2,
        help="direction of loss and corruption: 0 A->B, 1 A<-B, 2 A<->B",
    )
    parser.add_argument(
        "-i", "--interval", type=float, required=True,
        help="average time between messages from the sender's layer 5 (> 0)",
    )
    parser.add_argument(
        "-t", "--trace", type=int, default=0, help="trace level",
    )
    parser.add_argument(
        "-p", "--protocol", choices=sorted(PROTOCOLS), default="gbn",
        help="transport protocol to run",
    )
    return parser


def run_simulation(config: SimulationConfig, protocol: str) -> Emulator:
    """Run one simulation with the named protocol and return the finished emulator."""
    try:
        sender_class, receiver_class = PROTOCOLS[protocol]
    except KeyError:
        raise ValueError(f"unknown protocol: {protocol!r}") from None
    emulator = Emulator(config)
    emulator.run(sender_class(emulator), receiver_class(emulator))
    return emulator


def format_report(stats: Statistics, time: float, attempted: int) -> str:
    """Render the end-of-run summary."""
    lines = [
        f" Simulator terminated at time {time:f}",
        f" after attempting to send {attempted} msgs from layer5",
        f"number of messages dropped due to full window:  {stats.window_full} ",
        "number of valid (not corrupt or duplicate) acknowledgements received at A:  "
        f"{stats.new_acks} ",
        "(note: a single acknowledgement may have acknowledged more than one packet"
        " - if cumulative acknowledgements are used)",
        f"number of packet resends by A:  {stats.packets_resent} ",
        f"number of correct packets received at B:  {stats.packets_received} ",
        f"number of messages delivered to application:  {stats.messages_delivered} ",
    ]
    return "\n".join(lines)


def main(argv=None) -> int:
    """Parse arguments, run the simulation and print its report."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = SimulationConfig(
            messages=args.messages,
            mean_interarrival=args.interval,
            loss_prob=args.loss,
            corrupt_prob=args.corrupt,
            corrupt_direction=_DIRECTIONS[args.direction],
            trace=args.trace,
        )
    except ValueError as exc:
        parser.error(str(exc))

    print(_BANNER)
    try:
        emulator = run_simulation(config, args.protocol)
    except RuntimeError as exc:
        print(exc)
        return 1
    print(format_report(emulator.stats, emulator.time, emulator.messages_attempted))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())