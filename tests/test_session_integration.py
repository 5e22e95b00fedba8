"""Tests for the session-completion orchestrator"""
from datetime import datetime, timedelta
from unittest.mock import patch

from coachrpg import db
from coachrpg.models.character import RPGCharacter, XPLogEntry
from coachrpg.rpg.session_integration import on_session_complete

NOW = datetime(2025, 3, 3, 18, 30)


def test_fresh_user_strength_session(client_user):
    result = on_session_complete(1, client_user.id, "STRENGTH", now=NOW)

    assert result["success"] is True
    assert result["xp_awarded"] == 100
    assert result["stats_updated"] == {"strength": 1}
    assert result["streak_update"]["current_streak"] == 1
    # 100 XP is exactly the level 2 threshold
    assert result["level_up"] == {"old_level": 1, "new_level": 2, "unlocks": []}

    character = RPGCharacter.query.filter_by(user_id=client_user.id).one()
    assert character.xp == 100
    assert character.level == 2
    assert character.strength == 1
    assert character.current_streak == 1

    entry = XPLogEntry.query.one()
    assert entry.source == "session_complete"
    assert entry.reference_id == "1"


def test_self_logged_session_awards_less(client_user):
    result = on_session_complete(5, client_user.id, "CARDIO", "SELF_LOGGED", now=NOW)

    assert result["xp_awarded"] == 75
    assert result["stats_updated"] == {"endurance": 1}
    assert XPLogEntry.query.one().source == "self_logged_workout"


def test_missing_focus_counts_as_balanced(character, client_user):
    result = on_session_complete(2, client_user.id, None, now=NOW)
    assert result["stats_updated"] == {"strength": 1, "endurance": 1}


def test_level_up_is_reported(character, client_user):
    character.xp = 450
    character.level = 5
    db.session.commit()

    result = on_session_complete(3, client_user.id, "BALANCED", now=NOW)

    assert result["level_up"] == {"old_level": 5, "new_level": 6, "unlocks": []}


def test_daily_sessions_build_streak(character, client_user):
    for day in range(3):
        result = on_session_complete(day + 10, client_user.id, "STRENGTH", now=NOW + timedelta(days=day))

    assert result["streak_update"]["current_streak"] == 3
    assert character.xp == 300


def test_failure_rolls_back_every_step(client_user):
    with patch(
        "coachrpg.rpg.session_integration.record_workout",
        side_effect=RuntimeError("streak store unavailable"),
    ):
        result = on_session_complete(9, client_user.id, "STRENGTH", now=NOW)

    assert result["success"] is False
    assert result["error"] == "streak store unavailable"
    assert result["xp_awarded"] == 0
    assert RPGCharacter.query.filter_by(user_id=client_user.id).first() is None
    assert XPLogEntry.query.count() == 0


def test_failure_keeps_existing_character_untouched(character, client_user):
    with patch(
        "coachrpg.rpg.session_integration.update_stats_for_session",
        side_effect=RuntimeError("boom"),
    ):
        result = on_session_complete(9, client_user.id, "STRENGTH", now=NOW)

    assert result["success"] is False
    db.session.refresh(character)
    assert character.xp == 0
    assert XPLogEntry.query.count() == 0
