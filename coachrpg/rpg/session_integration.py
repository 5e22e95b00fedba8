# coachrpg/rpg/session_integration.py
"""
RPG updates for a completed training session.

Runs XP award, stat gains and the streak update in one database transaction:
either every step is committed or none is.
"""
from datetime import datetime
from typing import Any, Dict, Optional
import logging

from .. import db
from ..models.character import RPGCharacter
from .stats import update_stats_for_session
from .streaks import record_workout
from .xp import award_xp, initialize_character, XP_REWARDS

logger = logging.getLogger(__name__)

WORKOUT_TYPE_SELF_LOGGED = "SELF_LOGGED"


def _failed_result(error: str) -> Dict[str, Any]:
    return {
        "success": False,
        "xp_awarded": 0,
        "stats_updated": {},
        "streak_update": {
            "current_streak": 0,
            "longest_streak": 0,
            "bonus_awarded": False,
            "discipline_gained": False,
        },
        "error": error,
    }


def on_session_complete(
    session_id,
    client_id,
    focus_type: Optional[str] = None,
    workout_type: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Apply all RPG effects of a completed session and commit them.

    Coached sessions award 100 XP, self-logged ones 75 XP. Never raises:
    failures roll back and come back as {'success': False, 'error': ...}.
    """
    self_logged = workout_type == WORKOUT_TYPE_SELF_LOGGED

    try:
        if not RPGCharacter.query.filter_by(user_id=client_id).first():
            initialize_character(client_id)

        if self_logged:
            xp_amount = XP_REWARDS["SESSION_COMPLETE_UNSCHEDULED"]
            source, note = "self_logged_workout", "Self-logged workout"
        else:
            xp_amount = XP_REWARDS["SESSION_COMPLETE"]
            source, note = "session_complete", "Completed training session"

        xp_result = award_xp(client_id, xp_amount, source, session_id, note)

        stats_gained = update_stats_for_session(client_id, (focus_type or "balanced").lower())

        streak_result = record_workout(client_id, now=now)

        db.session.commit()

    except Exception as e:
        db.session.rollback()
        logger.exception(f"Error in on_session_complete for session {session_id}: {e}")
        return _failed_result(str(e))

    result = {
        "success": True,
        "xp_awarded": xp_amount,
        "stats_updated": stats_gained,
        "streak_update": {
            "current_streak": streak_result["current_streak"],
            "longest_streak": streak_result["longest_streak"],
            "bonus_awarded": streak_result["bonus_awarded"],
            "discipline_gained": streak_result["discipline_gained"],
        },
    }

    if xp_result["did_level_up"]:
        result["level_up"] = {
            "old_level": xp_result["old_level"],
            "new_level": xp_result["new_level"],
            "unlocks": xp_result["unlocks"],
        }

    logger.info(
        f"Session {session_id} completed for user {client_id}: "
        f"+{xp_amount} XP, stats {stats_gained}, streak {streak_result['current_streak']}"
    )
    return result
