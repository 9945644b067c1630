import math

import pytest

from dominant_speaker.config import (
    LEVELS_BUFF_LEN,
    MIN_ACTIVITY_SCORE,
    N1,
    N2,
    N3,
    subunit_len_for,
)
from dominant_speaker.numerics import compute_activity_score
from dominant_speaker.speaker import Speaker


def _feed(speaker, volume, start_ms, duration_ms):
    for t in range(start_ms, start_ms + duration_ms, 20):
        speaker.level_changed(volume, t)


def _eval(speaker):
    speaker.eval_scores(N1, N2, N3, subunit_len_for(N1))


def test_new_speaker_has_floor_scores():
    sp = Speaker(1000)
    assert sp.score(0) == MIN_ACTIVITY_SCORE
    assert sp.score(1) == MIN_ACTIVITY_SCORE
    assert sp.score(2) == MIN_ACTIVITY_SCORE
    assert sp.paused is False
    assert sp.last_level_change_ms == 1000
    assert sp.raw_level_sum() == 0


def test_single_sample_lands_once():
    sp = Speaker(0)
    sp.level_changed(100, 0)
    assert sp.raw_level_sum() == 100


def test_gap_replays_sample():
    sp = Speaker(0)
    sp.level_changed(10, 0)
    sp.level_changed(10, 200)
    assert sp.raw_level_sum() == 10 + 10 * (200 // 20)


def test_long_gap_is_capped_at_buffer_length():
    sp = Speaker(0)
    sp.level_changed(10, 100_000)
    assert sp.raw_level_sum() == 10 * LEVELS_BUFF_LEN


def test_level_above_max_is_clamped():
    sp = Speaker(0)
    sp.level_changed(255, 0)
    assert sp.raw_level_sum() == 127


def test_earlier_sample_is_ignored():
    sp = Speaker(0)
    sp.level_changed(50, 100)
    before = sp.raw_level_sum()
    sp.level_changed(50, 20)
    assert sp.raw_level_sum() == before
    assert sp.last_level_change_ms == 100


def test_silence_keeps_floor_scores():
    sp = Speaker(0)
    _feed(sp, 0, 0, 2000)
    _eval(sp)
    assert (sp.immediate_score, sp.medium_score, sp.long_score) == (
        MIN_ACTIVITY_SCORE,
        MIN_ACTIVITY_SCORE,
        MIN_ACTIVITY_SCORE,
    )


def test_constant_loud_signal_produces_floor_scores():
    sp = Speaker(0)
    _feed(sp, 127, 0, 2000)
    _eval(sp)
    _eval(sp)
    assert sp.immediate_score == 1.0e-10
    assert sp.medium_score == 1.0e-10
    assert sp.long_score == 1.0e-10


def test_rising_signal_raises_all_scores():
    sp = Speaker(0)
    sp.level_changed(47, 0)
    _feed(sp, 122, 20, 1980)
    _eval(sp)
    assert sp.immediate_score > MIN_ACTIVITY_SCORE
    assert sp.medium_score == compute_activity_score(5, N2, 0.5, 24.0)
    assert sp.long_score == compute_activity_score(10, N3, 0.5, 47.0)
    for value in (sp.immediate_score, sp.medium_score, sp.long_score):
        assert math.isfinite(value)


def test_score_interval_selection():
    sp = Speaker(0)
    sp.level_changed(47, 0)
    _feed(sp, 122, 20, 1980)
    _eval(sp)
    assert sp.score(0) == sp.immediate_score
    assert sp.score(1) == sp.medium_score
    assert sp.score(2) == sp.long_score
    assert sp.score(7) == sp.long_score


def test_eval_is_idempotent_without_new_samples():
    sp = Speaker(0)
    sp.level_changed(47, 0)
    _feed(sp, 122, 20, 1980)
    _eval(sp)
    first = (sp.immediate_score, sp.medium_score, sp.long_score)
    _eval(sp)
    assert (sp.immediate_score, sp.medium_score, sp.long_score) == first


def test_zero_subunit_len_rejected():
    sp = Speaker(0)
    with pytest.raises(ValueError):
        sp.eval_scores(N1, N2, N3, 0)