# coachrpg/rpg/xp.py
"""
XP ledger.

Every award updates the character's xp/level and appends an XPLogEntry, so
the sum of a user's log amounts always equals their xp.
"""
from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import func

from .. import db
from ..models.character import RPGCharacter, XPLogEntry
from .customization import DEFAULT_CUSTOMIZATION
from .levels import level_for_xp, unlocks_between, will_level_up

logger = logging.getLogger(__name__)

XP_REWARDS = {
    # Session completion
    "SESSION_COMPLETE": 100,
    "SESSION_COMPLETE_UNSCHEDULED": 75,  # self-logged workout
    # Quests
    "DAILY_QUEST": 50,
    "WEEKLY_QUEST": 200,
    "MONTHLY_QUEST": 1000,
    # Milestones
    "NEW_PR": 50,
    "STREAK_7_DAYS": 150,
    "STREAK_30_DAYS": 500,
    "STREAK_90_DAYS": 1500,
    # Social
    "REFERRAL": 500,
}


def award_xp(
    user_id,
    amount: int,
    source: str,
    reference_id: Optional[str] = None,
    note: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Award XP to a user's character and log the transaction.

    Not idempotent: callers that must not double-award for the same event
    dedupe on `reference_id` themselves.

    Returns:
        {
            'old_xp': int,
            'new_xp': int,
            'old_level': int,
            'new_level': int,
            'did_level_up': bool,
            'unlocks': list[str]
        }

    Raises:
        CharacterNotFound: the user has no character yet.
    """
    character = RPGCharacter.get_for_update(user_id)

    old_xp = character.xp
    new_xp = old_xp + amount
    old_level = character.level
    new_level = level_for_xp(new_xp)
    did_level_up = will_level_up(old_xp, amount)

    character.xp = new_xp
    character.level = new_level

    db.session.add(
        XPLogEntry(
            user_id=user_id,
            amount=amount,
            source=source,
            reference_id=str(reference_id) if reference_id is not None else None,
            note=note,
        )
    )
    db.session.flush()

    logger.info(
        f"Awarded {amount} XP to user {user_id} for {source}. "
        f"Total: {new_xp} XP, Level: {new_level}"
    )
    if did_level_up:
        logger.info(f"User {user_id} leveled up from {old_level} to {new_level}!")

    return {
        "old_xp": old_xp,
        "new_xp": new_xp,
        "old_level": old_level,
        "new_level": new_level,
        "did_level_up": did_level_up,
        "unlocks": unlocks_between(old_level, new_level) if did_level_up else [],
    }


def initialize_character(user_id) -> RPGCharacter:
    """Create the user's character, or return the existing one untouched."""
    existing = RPGCharacter.query.filter_by(user_id=user_id).first()
    if existing:
        return existing

    character = RPGCharacter(
        user_id=user_id,
        level=1,
        xp=0,
        strength=0,
        endurance=0,
        discipline=0,
        current_streak=0,
        longest_streak=0,
        avatar_config=dict(DEFAULT_CUSTOMIZATION),
        public_profile=False,
    )
    db.session.add(character)
    db.session.flush()

    logger.info(f"Initialized RPG character for user {user_id}")
    return character


def xp_history(user_id, limit: int = 50) -> List[XPLogEntry]:
    """Most recent XP transactions first."""
    return (
        XPLogEntry.query.filter_by(user_id=user_id)
        .order_by(XPLogEntry.created_at.desc(), XPLogEntry.id.desc())
        .limit(limit)
        .all()
    )


def xp_by_source(user_id, source: str) -> int:
    total = (
        db.session.query(func.coalesce(func.sum(XPLogEntry.amount), 0))
        .filter(XPLogEntry.user_id == user_id, XPLogEntry.source == source)
        .scalar()
    )
    return int(total or 0)
