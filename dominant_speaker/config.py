"""Tuning constants, configuration and election results for the detector."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Generic, TypeVar

PeerId = TypeVar("PeerId")

# Algorithm constants, identical to the production tuning of the reference observer.
C1: float = 3.0
C2: float = 2.0
C3: float = 0.0
N1: int = 13
N2: int = 5
N3: int = 10
LEVEL_IDLE_TIMEOUT_MS: int = 40
SPEAKER_IDLE_TIMEOUT_MS: int = 60 * 60 * 1000
LONG_THRESHOLD: int = 4
MAX_LEVEL: int = 127
MIN_LEVEL: int = 0
MIN_LEVEL_WINDOW_LEN: int = 750
MEDIUM_THRESHOLD: int = 7
IMMEDIATE_BUFF_LEN: int = 50
MEDIUMS_BUFF_LEN: int = 10
LONGS_BUFF_LEN: int = 1
LEVELS_BUFF_LEN: int = 50
MIN_ACTIVITY_SCORE: float = 1.0e-10

TICK_INTERVAL: timedelta = timedelta(milliseconds=300)
"""Recommended cadence for calling the detector's tick."""


@dataclass(frozen=True)
class DetectorConfig:
    """Tunable constants for the dominant-speaker election.

    ``n1`` is the immediate-window subband count; the subband width is
    derived as ``ceil(128 / n1)``.
    """

    c1: float = C1
    c2: float = C2
    c3: float = C3
    tick_interval: timedelta = TICK_INTERVAL
    n1: int = N1
    n2: int = N2
    n3: int = N3


@dataclass(frozen=True)
class SpeakerChange(Generic[PeerId]):
    """Emitted by a tick when the dominant speaker changes.

    ``c2_margin`` is the medium-window log-ratio margin above the C2
    threshold; it is 0.0 for single-peer rooms and bootstrap elections.
    """

    peer_id: PeerId
    c2_margin: float = 0.0


def subunit_len_for(n1: int) -> int:
    """Return the subband width ``ceil(128 / n1)``, treating ``n1 < 1`` as 1."""
    n1 = max(n1, 1)
    return -(-128 // n1)