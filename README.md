# netsim

netsim is a small discrete-event emulator of an unreliable network channel. The
channel runs between a sender (A) and a receiver (B). Two reliable transport
protocols run on top of it:

- **Go-Back-N** (`netsim.gbn`). It has a window of 6 packets and a sequence
  space of 7. Acknowledgements are cumulative. When the timer expires, A
  resends every packet in the window.
- **Selective Repeat** (`netsim.sr`). It acknowledges packets one by one. The
  receiver buffers packets that arrive out of order and hands them to the
  application in order. When the timer expires, A resends only the first
  unacknowledged packet.

Both protocols use a round-trip timeout of 16.0 time units.

### The channel

- It loses or corrupts packets with the probabilities you give.
- Loss and corruption can be limited to packets sent by A, to packets sent by
  B, or applied to both.
- It never reorders packets.
- A packet arrives 1 to 10 time units after the latest packet already in
  transit to the same side. If nothing is in transit, the delay counts from
  the current time.
- A corrupted packet gets one of three changes:
  - with probability 0.75, the first payload character is replaced by `Z`;
  - with probability 0.125, the sequence number is set to 999999;
  - with probability 0.125, the acknowledgement number is set to 999999.

### The application at A

It produces 20-character messages. Each message is one letter repeated: `a`,
`b`, `c`, … in turn, starting again after `z`. The gap between messages is
drawn uniformly from 0 to twice the mean you set.

## Installation

```
pip install .
```

Python 3.10 or later is required. The package has no runtime dependencies.

## Command line

```
netsim --help
netsim -n 20 -i 10 -l 0.1 -c 0.1 -p gbn
```

Options:

| Option | Meaning | Default |
| --- | --- | --- |
| `-n`, `--messages` | number of messages to simulate | required |
| `-i`, `--interval` | average time between messages from A's layer 5 (must be > 0) | required |
| `-l`, `--loss` | packet loss probability | `0.0` |
| `-c`, `--corrupt` | packet corruption probability | `0.0` |
| `-d`, `--direction` | where loss and corruption apply: `0` A->B, `1` A<-B, `2` both | `2` |
| `-t`, `--trace` | trace level; higher values print more of the event log | `0` |
| `-p`, `--protocol` | `gbn` or `sr` | `gbn` |

Invalid values are reported as usage errors. These include a negative message
count, an interval that is not positive, and a probability outside [0, 1].

The run goes on until no events are left. The command then prints a summary
with these lines:

- the simulated time at which the run ended;
- the number of messages the application tried to send;
- messages dropped because the send window was full;
- valid (not corrupt or duplicate) acknowledgements received at A;
- packets resent by A;
- correct packets received at B;
- messages delivered to the application.

The emulator checks its random number generator before each run. The check
draws 1000 numbers. If their mean falls outside [0.25, 0.75], the command
prints a message and exits with status 1.

## Library use

```python
from netsim.emulator import SimulationConfig
from netsim.cli import run_simulation, format_report

config = SimulationConfig(messages=20, mean_interarrival=10.0, loss_prob=0.1)
emulator = run_simulation(config, "sr")
print(format_report(emulator.stats, emulator.time, emulator.messages_attempted))
print(emulator.delivered)  # list of (Entity, payload) pairs
```

### `SimulationConfig` fields

- `messages`
- `mean_interarrival`
- `loss_prob`
- `corrupt_prob`
- `corrupt_direction`: an `Entity`, or `None` for both directions
- `trace`
- `bidirectional`

### The emulator

`Emulator(config, rng=None)` takes any object with a `random()` method. By
default it uses `random.Random(9999)`, so runs are repeatable.

Its members:

- `run(sender, receiver)` processes events and returns a `Statistics` object.
- `pending_events()` shows the events that are still scheduled.
- `stats` holds the counters described below.

### Writing your own protocol

Subclass `SenderProtocol` and `ReceiverProtocol` from `netsim.emulator`. Your
entities talk to the network through the emulator:

- `to_layer3(entity, packet)` sends a packet into the channel towards the
  peer.
- `to_layer5(entity, data)` delivers data to the application.
- `start_timer(entity, increment)` and `stop_timer(entity)` control the
  entity's single timer. If the timer is already running (for a start) or not
  running (for a stop), they issue a `RuntimeWarning` and return `False`.

Packets are frozen `netsim.packets.Packet` values: `seqnum`, `acknum`,
`checksum` and a 20-character `payload`. Use these helpers from
`netsim.packets`:

- `make_packet(seqnum, acknum, payload)` builds a packet with a matching
  checksum.
- `compute_checksum` and `is_corrupted` implement the checksum. It is the sum
  of the two header numbers and the payload character codes.

## Statistics

Each protocol fills in a different set of counters in `Statistics`.

The emulator itself always counts:

- `messages_delivered`
- `packets_to_layer3`
- `packets_lost`
- `packets_corrupted`

The Go-Back-N entities also update:

- `window_full`
- `total_acks_received`
- `new_acks`
- `packets_resent`
- `packets_received`

The Selective Repeat entities update none of these five counters. With
`-p sr`, the summary therefore shows zero for dropped messages,
acknowledgements, resends and packets received. Use the delivered-message
count to judge the run.

## Limits

Data flows from A to B only.

The receivers do not send application data. Messages given to B are counted
in `ignored_messages`, and timer expiries at B are counted in
`ignored_timeouts`; nothing else happens. `SimulationConfig.bidirectional`
only decides whether new messages may be handed to B. The command line does
not set it.