"""Per-peer audio state with rolling buffers at three time scales."""

from __future__ import annotations

import math

from .config import (
    IMMEDIATE_BUFF_LEN,
    LEVELS_BUFF_LEN,
    LONG_THRESHOLD,
    LONGS_BUFF_LEN,
    MAX_LEVEL,
    MEDIUM_THRESHOLD,
    MEDIUMS_BUFF_LEN,
    MIN_ACTIVITY_SCORE,
    MIN_LEVEL,
    MIN_LEVEL_WINDOW_LEN,
)
from .numerics import compute_activity_score, compute_bigs

_U8_MAX = 255


class Speaker:
    """Audio state of one peer: raw level ring buffer and derived scores."""

    def __init__(self, now_ms: int) -> None:
        self.paused = False
        self.immediate_score = MIN_ACTIVITY_SCORE
        self.medium_score = MIN_ACTIVITY_SCORE
        self.long_score = MIN_ACTIVITY_SCORE
        self.last_level_change_ms = now_ms
        self._min_level = MIN_LEVEL
        self._next_min_level = MIN_LEVEL
        self._next_min_level_window_len = 0
        self._immediates = [0] * IMMEDIATE_BUFF_LEN
        self._mediums = [0] * MEDIUMS_BUFF_LEN
        self._longs = [0] * LONGS_BUFF_LEN
        self._levels = [0] * LEVELS_BUFF_LEN
        self._next_level_index = 0

    def __repr__(self) -> str:
        return (
            f"Speaker(paused={self.paused}, immediate={self.immediate_score}, "
            f"medium={self.medium_score}, long={self.long_score})"
        )

    def score(self, interval: int) -> float:
        """Return the score for 0 = immediate, 1 = medium, anything else = long."""
        if interval == 0:
            return self.immediate_score
        if interval == 1:
            return self.medium_score
        return self.long_score

    def raw_level_sum(self) -> int:
        """Return the sum of the raw volume samples in the levels buffer."""
        return sum(self._levels)

    def level_changed(self, level: int, now_ms: int) -> None:
        """Record a volume sample (0 silent .. 127 loud) taken at ``now_ms``.

        Samples older than the last one are ignored; gaps longer than 20 ms
        are filled by repeating the sample, up to the buffer length.
        """
        if now_ms < self.last_level_change_ms:
            return
        elapsed_ms = now_ms - self.last_level_change_ms
        self.last_level_change_ms = now_ms
        value = min(level, MAX_LEVEL)
        repeats = min(max(elapsed_ms // 20, 1), LEVELS_BUFF_LEN)
        for _ in range(repeats):
            self._levels[self._next_level_index] = value
            self._next_level_index = (self._next_level_index + 1) % LEVELS_BUFF_LEN
        self._update_min_level(value)

    def _update_min_level(self, level: int) -> None:
        if level == MIN_LEVEL:
            return
        if self._min_level == MIN_LEVEL or self._min_level > level:
            self._min_level = level
            self._next_min_level = MIN_LEVEL
            self._next_min_level_window_len = 0
        elif self._next_min_level == MIN_LEVEL:
            self._next_min_level = level
            self._next_min_level_window_len = 1
        else:
            self._next_min_level = min(self._next_min_level, level)
            self._next_min_level_window_len += 1
            if self._next_min_level_window_len >= MIN_LEVEL_WINDOW_LEN:
                raw = math.sqrt(self._min_level * self._next_min_level)
                self._min_level = int(min(max(raw, MIN_LEVEL), MAX_LEVEL))
                self._next_min_level = MIN_LEVEL
                self._next_min_level_window_len = 0

    def _compute_immediates(self, subunit_len: int) -> bool:
        if subunit_len <= 0:
            raise ValueError("subunit_len must be positive")
        threshold = min(self._min_level + subunit_len, _U8_MAX)
        changed = False
        for i in range(IMMEDIATE_BUFF_LEN):
            level = self._levels[(self._next_level_index - i - 1) % LEVELS_BUFF_LEN]
            if level < threshold:
                level = MIN_LEVEL
            immediate = level // subunit_len
            if self._immediates[i] != immediate:
                self._immediates[i] = immediate
                changed = True
        return changed

    def eval_scores(self, n1: int, n2: int, n3: int, subunit_len: int) -> None:
        """Re-evaluate the three activity scores, stopping where nothing changed."""
        if not self._compute_immediates(subunit_len):
            return
        self.immediate_score = compute_activity_score(self._immediates[0], n1, 0.5, 0.78)
        if not compute_bigs(self._immediates, self._mediums, MEDIUM_THRESHOLD):
            return
        self.medium_score = compute_activity_score(self._mediums[0], n2, 0.5, 24.0)
        if not compute_bigs(self._mediums, self._longs, LONG_THRESHOLD):
            return
        self.long_score = compute_activity_score(self._longs[0], n3, 0.5, 47.0)