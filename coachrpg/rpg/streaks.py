# coachrpg/rpg/streaks.py
"""
Daily workout streaks.

A streak counts consecutive calendar days with at least one workout. Only the
date part of timestamps matters; several workouts on one day count once.

Transitions of record_workout():
  - first workout ever:   streak = 1
  - same calendar day:    nothing changes, nothing is written
  - next calendar day:    streak + 1 (milestone XP at 7/30/90, +2 discipline
                          every 7 days)
  - 2+ days gap:          streak = 1, longest streak kept
"""
from datetime import date, datetime
from typing import Any, Dict, Optional
import logging

from .. import db
from ..models.character import RPGCharacter
from .stats import increment_discipline, DISCIPLINE_PER_WEEK_STREAK
from .xp import award_xp, XP_REWARDS

logger = logging.getLogger(__name__)

STREAK_MILESTONES = {
    7: XP_REWARDS["STREAK_7_DAYS"],
    30: XP_REWARDS["STREAK_30_DAYS"],
    90: XP_REWARDS["STREAK_90_DAYS"],
}

DISCIPLINE_STREAK_INTERVAL = 7


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(earlier, later) -> int:
    """Whole calendar days from `earlier` to `later`, time of day ignored."""
    return (_as_date(later) - _as_date(earlier)).days


def record_workout(user_id, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Update the user's streak for a workout done at `now` (default: local now).

    Returns:
        {
            'streak_updated': bool,
            'current_streak': int,
            'longest_streak': int,
            'streak_broken': bool,
            'bonus_awarded': bool,
            'discipline_gained': bool
        }

    Raises:
        CharacterNotFound: the user has no character yet.
    """
    if now is None:
        now = datetime.now()

    character = RPGCharacter.get_for_update(user_id)
    last_workout = character.last_workout_date

    streak_broken = False
    bonus_awarded = False
    discipline_gained = False

    if last_workout is None:
        new_streak = 1
    else:
        gap = days_between(last_workout, now)

        if gap <= 0:
            # Same day (or a backdated workout): streak untouched
            return {
                "streak_updated": False,
                "current_streak": character.current_streak,
                "longest_streak": character.longest_streak,
                "streak_broken": False,
                "bonus_awarded": False,
                "discipline_gained": False,
            }

        if gap == 1:
            new_streak = character.current_streak + 1
        else:
            new_streak = 1
            streak_broken = True
            logger.info(
                f"User {user_id} streak broken. "
                f"Was {character.current_streak}, gap was {gap} days"
            )

    character.current_streak = new_streak
    character.longest_streak = max(character.longest_streak, new_streak)
    character.last_workout_date = now
    db.session.flush()

    if not streak_broken:
        milestone_xp = STREAK_MILESTONES.get(new_streak)
        if milestone_xp:
            award_xp(user_id, milestone_xp, "streak_bonus", note=f"{new_streak}-day streak!")
            bonus_awarded = True

        if new_streak % DISCIPLINE_STREAK_INTERVAL == 0:
            increment_discipline(user_id, DISCIPLINE_PER_WEEK_STREAK)
            discipline_gained = True

    return {
        "streak_updated": True,
        "current_streak": character.current_streak,
        "longest_streak": character.longest_streak,
        "streak_broken": streak_broken,
        "bonus_awarded": bonus_awarded,
        "discipline_gained": discipline_gained,
    }


def streak_status(user_id, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Read-only streak summary (for reminders / dashboards)."""
    character = RPGCharacter.query.filter_by(user_id=user_id).first()

    if not character:
        return {
            "current_streak": 0,
            "longest_streak": 0,
            "last_workout_date": None,
            "is_at_risk": False,
            "days_until_break": 0,
        }

    if now is None:
        now = datetime.now()

    is_at_risk = False
    if character.last_workout_date:
        # last workout yesterday: skipping today breaks the streak
        is_at_risk = days_between(character.last_workout_date, now) == 1

    return {
        "current_streak": character.current_streak,
        "longest_streak": character.longest_streak,
        "last_workout_date": character.last_workout_date,
        "is_at_risk": is_at_risk,
        "days_until_break": 1 if is_at_risk else 0,
    }
