import pytest

from netsim.cli import build_parser, format_report, main, run_simulation
from netsim.emulator import Entity, SimulationConfig, Statistics


def test_parser_defaults():
    args = build_parser().parse_args(["-n", "3", "-i", "10"])
    assert args.messages == 3
    assert args.interval == 10.0
    assert args.loss == 0.0
    assert args.corrupt == 0.0
    assert args.direction == 2
    assert args.protocol == "gbn"


def test_parser_requires_message_count():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["-i", "10"])


def test_parser_rejects_unknown_direction():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["-n", "3", "-i", "10", "-d", "5"])


def test_run_simulation_rejects_unknown_protocol():
    config = SimulationConfig(messages=1, mean_interarrival=10.0)
    with pytest.raises(ValueError):
        run_simulation(config, "stop-and-wait")


@pytest.mark.parametrize("protocol", ["gbn", "sr"])
def test_run_simulation_delivers_everything_without_loss(protocol):
    config = SimulationConfig(messages=5, mean_interarrival=1000.0)
    emulator = run_simulation(config, protocol)
    assert emulator.messages_attempted == 5
    assert emulator.stats.messages_delivered == 5
    assert all(entity is Entity.B for entity, _ in emulator.delivered)


def test_run_simulation_with_one_way_loss_finishes():
    config = SimulationConfig(
        messages=10,
        mean_interarrival=50.0,
        loss_prob=0.3,
        corrupt_direction=Entity.A,
    )
    emulator = run_simulation(config, "gbn")
    assert emulator.pending_events() == ()
    stats = emulator.stats
    assert stats.messages_delivered + stats.window_full == 10


def test_format_report_lines():
    stats = Statistics(
        window_full=3,
        new_acks=4,
        packets_resent=5,
        packets_received=6,
        messages_delivered=7,
    )
    lines = format_report(stats, 12.5, 9).splitlines()
    assert lines[0] == " Simulator terminated at time 12.500000"
    assert lines[1] == " after attempting to send 9 msgs from layer5"
    assert "number of messages dropped due to full window:  3 " in lines
    assert "number of packet resends by A:  5 " in lines
    assert "number of correct packets received at B:  6 " in lines
    assert "number of messages delivered to application:  7 " in lines


def test_main_prints_report(capsys):
    code = main(["-n", "4", "-i", "1000", "-p", "sr"])
    output = capsys.readouterr().out
    assert code == 0
    assert "Stop and Wait Network Simulator" in output
    assert "after attempting to send 4 msgs from layer5" in output
    assert "number of messages delivered to application:  4 " in output


def test_main_rejects_invalid_probability():
    with pytest.raises(SystemExit) as excinfo:
        main(["-n", "4", "-i", "10", "-l", "1.5"])
    assert excinfo.value.code == 2


def test_main_rejects_non_positive_interval():
    with pytest.raises(SystemExit) as excinfo:
        main(["-n", "4", "-i", "0"])
    assert excinfo.value.code == 2