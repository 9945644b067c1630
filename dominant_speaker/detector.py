"""Room-level dominant-speaker detector with hysteresis election."""

from __future__ import annotations

import math
from typing import Generic, Hashable, TypeVar

from .config import (
    LEVEL_IDLE_TIMEOUT_MS,
    MAX_LEVEL,
    MIN_LEVEL,
    SPEAKER_IDLE_TIMEOUT_MS,
    DetectorConfig,
    SpeakerChange,
    subunit_len_for,
)
from .speaker import Speaker

PeerId = TypeVar("PeerId", bound=Hashable)


class ActiveSpeakerDetector(Generic[PeerId]):
    """Per-room dominant-speaker detector.

    Feed RFC 6464 audio levels with :meth:`record_level` and call
    :meth:`tick` on a regular timer (300 ms recommended).
    """

    def __init__(self, config: DetectorConfig | None = None) -> None:
        self.config = config if config is not None else DetectorConfig()
        self._speakers: dict[PeerId, Speaker] = {}
        self._current_dominant: PeerId | None = None
        self._last_level_idle_time: int | None = None

    def __repr__(self) -> str:
        return (
            f"ActiveSpeakerDetector(peers={len(self._speakers)}, "
            f"dominant={self._current_dominant!r})"
        )

    def add_peer(self, peer_id: PeerId, now_ms: int) -> None:
        """Register a peer; registering an existing peer does nothing."""
        if peer_id not in self._speakers:
            self._speakers[peer_id] = Speaker(now_ms)

    def remove_peer(self, peer_id: PeerId) -> None:
        """Remove a peer, clearing dominance if it was the dominant one."""
        self._speakers.pop(peer_id, None)
        if self._current_dominant is not None and self._current_dominant == peer_id:
            self._current_dominant = None

    def record_level(self, peer_id: PeerId, level_raw: int, now_ms: int) -> None:
        """Record an RFC 6464 level (0 loudest, 127 silent) for a peer.

        Unknown peers are registered implicitly.
        """
        volume = MAX_LEVEL - min(max(level_raw, 0), MAX_LEVEL)
        speaker = self._speakers.get(peer_id)
        if speaker is None:
            speaker = self._speakers[peer_id] = Speaker(now_ms)
        speaker.level_changed(volume, now_ms)

    def _timeout_idle_levels(self, now_ms: int) -> None:
        for peer_id, speaker in self._speakers.items():
            idle = max(now_ms - speaker.last_level_change_ms, 0)
            if idle > SPEAKER_IDLE_TIMEOUT_MS and peer_id != self._current_dominant:
                speaker.paused = True
            elif idle > LEVEL_IDLE_TIMEOUT_MS:
                speaker.level_changed(MIN_LEVEL, now_ms)

    def tick(self, now_ms: int) -> SpeakerChange[PeerId] | None:
        """Advance the detector clock; return a change when dominance moves."""
        if self._last_level_idle_time is None:
            self._last_level_idle_time = now_ms
        elif max(now_ms - self._last_level_idle_time, 0) >= LEVEL_IDLE_TIMEOUT_MS:
            self._timeout_idle_levels(now_ms)
            self._last_level_idle_time = now_ms
        if not self._speakers:
            return None
        return self._calculate_active_speaker()

    def _active(self) -> list[tuple[PeerId, Speaker]]:
        return [(pid, sp) for pid, sp in self._speakers.items() if not sp.paused]

    def _calculate_active_speaker(self) -> SpeakerChange[PeerId] | None:
        cfg = self.config
        subunit_len = subunit_len_for(cfg.n1)
        found = False
        winner: PeerId | None = None
        margin = 0.0

        if len(self._speakers) == 1:
            winner = next(iter(self._speakers))
            found = True
        else:
            for speaker in self._speakers.values():
                if not speaker.paused:
                    speaker.eval_scores(cfg.n1, cfg.n2, cfg.n3, subunit_len)

            incumbent = self._current_dominant
            if incumbent is None:
                best_score = -math.inf
                best_raw = 0
                for peer_id, speaker in self._active():
                    score = speaker.score(1)
                    raw = speaker.raw_level_sum()
                    if score > best_score or (score == best_score and raw > best_raw):
                        best_score = score
                        best_raw = raw
                        winner = peer_id
                        found = True
            else:
                dominant = self._speakers.get(incumbent)
                if dominant is None:
                    return None
                dom = (dominant.score(0), dominant.score(1), dominant.score(2))
                best_c2 = cfg.c2
                for peer_id, speaker in self._active():
                    if peer_id == incumbent:
                        continue
                    c1 = math.log(speaker.score(0) / dom[0])
                    c2 = math.log(speaker.score(1) / dom[1])
                    c3 = math.log(speaker.score(2) / dom[2])
                    if c1 > cfg.c1 and c2 > cfg.c2 and c3 > cfg.c3 and c2 > best_c2:
                        best_c2 = c2
                        winner = peer_id
                        found = True
                margin = max(best_c2 - cfg.c2, 0.0)

        if not found:
            return None
        if self._current_dominant is not None and winner == self._current_dominant:
            return None
        self._current_dominant = winner
        return SpeakerChange(peer_id=winner, c2_margin=margin)

    def current_dominant(self) -> PeerId | None:
        """Return the current dominant peer, or None."""
        return self._current_dominant

    def current_top_k(self, k: int) -> list[PeerId]:
        """Return up to ``k`` non-paused peers by medium score, highest first.

        Ties are broken by the raw level sum, louder first.
        """
        if k < 0:
            raise ValueError("k must be non-negative")
        ranked = sorted(
            self._active(),
            key=lambda item: (item[1].medium_score, item[1].raw_level_sum()),
            reverse=True,
        )
        return [peer_id for peer_id, _ in ranked[:k]]

    def peer_scores(self) -> list[tuple[PeerId, float, float, float]]:
        """Return ``(peer_id, immediate, medium, long)`` for every peer."""
        return [
            (pid, sp.immediate_score, sp.medium_score, sp.long_score)
            for pid, sp in self._speakers.items()
        ]