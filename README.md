# dominant_speaker

Dominant speaker identification for multipoint conferencing. The package uses
the three-time-scale subband comparison algorithm, with immediate, medium and
long windows and log-ratio hysteresis. Its constants match the ones widely
used in SFU deployments.

You feed it RFC 6464 audio-level observations for each participant. A level of
0 is the loudest and 127 is silent. You call `tick` on a timer, about every
300 ms, and `tick` tells you when the dominant speaker changes.

The package depends only on the standard library.

## Installation

```
pip install .
```

## Quick start

Timestamps are integer milliseconds. They can start from any epoch.

```python
from dominant_speaker.detector import ActiveSpeakerDetector

detector = ActiveSpeakerDetector()
detector.add_peer(1, 0)
detector.add_peer(2, 0)

# Peer 1 speaks and peer 2 is silent, one sample every 20 ms for 2 seconds.
for t_ms in range(0, 2000, 20):
    detector.record_level(1, 5, t_ms)
    detector.record_level(2, 127, t_ms)

change = detector.tick(2050)
if change is not None:
    print("dominant speaker:", change.peer_id, "margin:", change.c2_margin)
```

A peer identifier can be any hashable value, such as an int, a string or a UUID.

## API

### `dominant_speaker.detector.ActiveSpeakerDetector(config=None)`

Creates a detector for one room. If you omit `config`, the detector uses `DetectorConfig()`.

- `add_peer(peer_id, now_ms)` registers a participant. Calling it again for a
  peer that is already registered does nothing.
- `remove_peer(peer_id)` removes a participant. If the peer is unknown, nothing
  happens. If the peer was dominant, the dominant speaker is cleared and the
  next `tick` elects a new one.
- `record_level(peer_id, level_raw, now_ms)` records an RFC 6464 level.
  - Levels are clamped to the range 0..127, so any value above 127 counts as
    silence.
  - A peer you have not added is registered automatically.
  - A sample with a timestamp earlier than the peer's previous sample is
    ignored.
- `tick(now_ms)` runs the election.
  - It returns a `SpeakerChange` when the dominant speaker changes, and `None`
    otherwise. It also returns `None` when the room is empty.
  - When there is no incumbent, the peer with the highest medium-window score
    wins. Ties go to the peer with the louder raw level.
  - When there is an incumbent, a challenger must beat it on all three
    log-ratio thresholds, C1, C2 and C3, to take over.
  - A peer that has sent no level for longer than an hour is paused and takes
    no part in elections, unless it is the dominant speaker.
- `current_dominant()` returns the current dominant peer, or `None`.
- `current_top_k(k)` returns up to `k` non-paused peers, ranked by
  medium-window score, highest first. Ties are broken by raw level. A negative
  `k` raises `ValueError`.
- `peer_scores()` returns a list of `(peer_id, immediate, medium, long)`
  tuples, one for every peer.

Scores are updated only by `tick`.

### `dominant_speaker.config`

`SpeakerChange` is a frozen dataclass with two fields:

- `peer_id` is the new dominant speaker.
- `c2_margin` is how far the winner's medium-window log-ratio was above the C2
  threshold. It is `0.0` for bootstrap elections and single-peer elections.

`DetectorConfig` is a frozen dataclass with these fields:

| Field | Default | Meaning |
|-------|---------|---------|
| `c1` | `3.0` | Immediate-window threshold |
| `c2` | `2.0` | Medium-window threshold |
| `c3` | `0.0` | Long-window threshold |
| `n1` | `13` | Immediate-window subband count |
| `n2` | `5` | Medium-window subband count |
| `n3` | `10` | Long-window subband count |
| `tick_interval` | `timedelta(milliseconds=300)` | Recommended tick cadence |

The detector does not read `tick_interval`. It is there for your own timer,
and the same value is available as the constant `TICK_INTERVAL`.

`subunit_len_for(n1)` returns the subband width `ceil(128 / n1)`. An `n1`
below 1 is treated as 1.

```python
from dominant_speaker.config import DetectorConfig
from dominant_speaker.detector import ActiveSpeakerDetector

detector = ActiveSpeakerDetector(DetectorConfig(c1=5.0, c2=4.0))
```

Higher values of C1 and C2 make speaker switches rarer.

### Lower-level pieces

`dominant_speaker.speaker.Speaker` holds the per-peer level buffers and
scores. `dominant_speaker.numerics` provides three helpers:

- `binomial_coefficient`
- `compute_activity_score`
- `compute_bigs`

## What it does not do

This is a library only. It has no command-line program, and it runs no timer
of its own, so you must call `tick` yourself. It does not parse RTP packets or
header extensions, and it does not decode audio. You extract the RFC 6464
levels and pass them in.

## Running the tests

```
pip install .[test]
pytest
```