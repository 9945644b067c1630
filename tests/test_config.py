from dataclasses import replace
from datetime import timedelta

from dominant_speaker.config import (
    TICK_INTERVAL,
    DetectorConfig,
    SpeakerChange,
    subunit_len_for,
)


def test_default_n1_gives_10():
    assert subunit_len_for(13) == 10


def test_n1_10_gives_13():
    assert subunit_len_for(10) == 13


def test_n1_8_gives_16():
    assert subunit_len_for(8) == 16


def test_n1_1_gives_128():
    assert subunit_len_for(1) == 128


def test_n1_255_gives_1():
    assert subunit_len_for(255) == 1


def test_n1_zero_is_guarded():
    assert subunit_len_for(0) == subunit_len_for(1)


def test_default_config_matches_reference_constants():
    config = DetectorConfig()
    assert config.c1 == 3.0
    assert config.c2 == 2.0
    assert config.n1 == 13
    assert config.tick_interval == TICK_INTERVAL
    assert TICK_INTERVAL == timedelta(milliseconds=300)


def test_custom_config_overrides_fields():
    config = replace(DetectorConfig(), c1=5.0, c2=4.0, c3=1.0, n1=10, n2=4, n3=8)
    assert config.c1 == 5.0
    assert config.c2 == 4.0
    assert config.c3 == 1.0
    assert (config.n1, config.n2, config.n3) == (10, 4, 8)
    assert config.tick_interval == TICK_INTERVAL


def test_speaker_change_equality():
    assert SpeakerChange(1, 0.0) == SpeakerChange(peer_id=1, c2_margin=0.0)
    assert SpeakerChange("a").c2_margin == 0.0
    assert not (SpeakerChange(1, 0.0) == SpeakerChange(2, 0.0))