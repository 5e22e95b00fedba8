"""Tests for the leveling table"""
from coachrpg.rpg.levels import (
    MAX_LEVEL,
    level_for_xp,
    level_progress,
    level_tier,
    level_unlocks,
    unlocks_between,
    will_level_up,
    xp_for_level,
)


def test_xp_for_level_thresholds():
    assert xp_for_level(0) == 0
    assert xp_for_level(1) == 0
    assert xp_for_level(2) == 100
    assert xp_for_level(6) == 500
    assert xp_for_level(11) == 1500
    assert xp_for_level(21) == 5500
    assert xp_for_level(31) == 11500
    assert xp_for_level(MAX_LEVEL) == 11500 + 19 * 800


def test_level_for_xp_round_trips_every_level():
    for level in range(1, MAX_LEVEL + 1):
        assert level_for_xp(xp_for_level(level)) == level


def test_level_for_xp_just_below_threshold():
    assert level_for_xp(99) == 1
    assert level_for_xp(499) == 5
    assert level_for_xp(500) == 6


def test_level_for_xp_is_monotonic():
    previous = level_for_xp(0)
    for xp in range(0, 30000, 37):
        level = level_for_xp(xp)
        assert level >= previous
        previous = level


def test_level_is_capped_at_max():
    assert level_for_xp(10 ** 7) == MAX_LEVEL


def test_level_progress_mid_level():
    # level 6 spans 500..700
    assert level_progress(550) == {"current": 50, "required": 200, "percentage": 25}


def test_level_progress_floors_percentage():
    assert level_progress(33)["percentage"] == 33
    assert level_progress(199)["percentage"] == 99


def test_level_progress_at_max_level():
    progress = level_progress(xp_for_level(MAX_LEVEL) + 1234)
    assert progress == {"current": 1234, "required": 0, "percentage": 100}


def test_will_level_up():
    assert will_level_up(50, 50) is True
    assert will_level_up(0, 99) is False


def test_level_tier_names():
    assert level_tier(1) == "BEGINNER"
    assert level_tier(6) == "INTERMEDIATE"
    assert level_tier(11) == "ADVANCED"
    assert level_tier(21) == "ELITE"
    assert level_tier(50) == "MASTER"


def test_unlocks_between_collects_skipped_levels():
    assert level_unlocks(3) == []
    unlocks = unlocks_between(4, 10)
    assert "Avatar accessories unlocked" in unlocks
    assert "Advanced avatar customization unlocked" in unlocks
    assert unlocks_between(5, 5) == []
