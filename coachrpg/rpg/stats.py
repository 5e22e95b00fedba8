# coachrpg/rpg/stats.py
"""
Strength / Endurance / Discipline stats.

Stats live on the character in [STAT_MIN, STAT_MAX]. Strength and endurance
grow with completed sessions; discipline grows with weekly streaks.
"""
from typing import Dict, Optional
import logging

from .. import db
from ..models.character import RPGCharacter

logger = logging.getLogger(__name__)

STAT_MIN = 0
STAT_MAX = 100

STAT_NAMES = ("strength", "endurance", "discipline")

STRENGTH_PER_SESSION = 1
ENDURANCE_PER_SESSION = 1
DISCIPLINE_PER_WEEK_STREAK = 2

STRENGTH_KEYWORDS = ("strength", "weights", "resistance", "lifting")
ENDURANCE_KEYWORDS = ("cardio", "running", "endurance", "hiit")

# extra keywords only looked at in free-text session notes
STRENGTH_NOTE_KEYWORDS = ("strength", "weights", "bench", "squat", "deadlift")
CARDIO_NOTE_KEYWORDS = ("cardio", "running", "treadmill", "bike", "elliptical")


def clamp_stat(value: int) -> int:
    return max(STAT_MIN, min(value, STAT_MAX))


def power_level(strength: int, endurance: int, discipline: int) -> int:
    """Combined stat score: floor of the mean of the three stats."""
    return (strength + endurance + discipline) // 3


def _tier(value: int, names) -> str:
    if value < 25:
        return names[0]
    if value < 50:
        return names[1]
    if value < 75:
        return names[2]
    return names[3]


def stat_tiers(strength: int, endurance: int, discipline: int) -> Dict[str, object]:
    """Visual avatar modifiers derived from stats."""
    return {
        "muscle_tier": _tier(strength, ("normal", "defined", "muscular", "huge")),
        "leanness_tier": _tier(endurance, ("standard", "lean", "athletic", "shredded")),
        "aura_tier": _tier(discipline, ("none", "faint", "bright", "radiant")),
        "power_level": power_level(strength, endurance, discipline),
    }


def stat_label_for_value(value: int) -> str:
    if value < 10:
        return "Novice"
    if value < 25:
        return "Beginner"
    if value < 50:
        return "Intermediate"
    if value < 75:
        return "Advanced"
    if value < 90:
        return "Expert"
    return "Master"


def stat_labels(strength: int, endurance: int, discipline: int) -> Dict[str, str]:
    return {
        "strength": stat_label_for_value(strength),
        "endurance": stat_label_for_value(endurance),
        "discipline": stat_label_for_value(discipline),
    }


def increment_stat(user_id, stat: str, amount: int) -> int:
    """
    Add `amount` to one stat, clamped to [STAT_MIN, STAT_MAX].

    Raises CharacterNotFound if the user has no character. Flushes but does
    not commit; the caller owns the transaction.
    """
    if stat not in STAT_NAMES:
        raise ValueError(f"unknown stat '{stat}'")

    character = RPGCharacter.get_for_update(user_id)
    new_value = clamp_stat(getattr(character, stat) + amount)
    setattr(character, stat, new_value)
    db.session.flush()

    logger.debug(f"User {user_id} {stat} +{amount} -> {new_value}")
    return new_value


def increment_strength(user_id, amount: int = STRENGTH_PER_SESSION) -> int:
    return increment_stat(user_id, "strength", amount)


def increment_endurance(user_id, amount: int = ENDURANCE_PER_SESSION) -> int:
    return increment_stat(user_id, "endurance", amount)


def increment_discipline(user_id, amount: int = DISCIPLINE_PER_WEEK_STREAK) -> int:
    return increment_stat(user_id, "discipline", amount)


def set_stats(user_id, strength: int, endurance: int, discipline: int) -> RPGCharacter:
    """Overwrite all three stats (admin tooling). Values are clamped."""
    character = RPGCharacter.get_for_update(user_id)
    character.strength = clamp_stat(strength)
    character.endurance = clamp_stat(endurance)
    character.discipline = clamp_stat(discipline)
    db.session.flush()
    return character


def classify_session_stats(session_type: Optional[str]) -> Dict[str, int]:
    """
    Which stats a session trains, from its free-text type label.

    Case-insensitive substring match. A label can hit both keyword sets.
    Anything unrecognised (including empty / None) counts as balanced.
    """
    lower_type = (session_type or "").lower()
    gains = {}

    if any(word in lower_type for word in STRENGTH_KEYWORDS):
        gains["strength"] = STRENGTH_PER_SESSION

    if any(word in lower_type for word in ENDURANCE_KEYWORDS):
        gains["endurance"] = ENDURANCE_PER_SESSION

    if not gains:
        gains = {"strength": 1, "endurance": 1}

    return gains


def update_stats_for_session(user_id, session_type: Optional[str]) -> Dict[str, int]:
    gains = classify_session_stats(session_type)

    if gains.get("strength"):
        increment_strength(user_id, gains["strength"])
    if gains.get("endurance"):
        increment_endurance(user_id, gains["endurance"])

    return gains


def detect_session_type(session_type: Optional[str] = None, notes: Optional[str] = None) -> str:
    """Returns 'strength', 'cardio' or 'balanced' from a type label and notes."""
    lower_type = (session_type or "").lower()
    lower_notes = (notes or "").lower()

    if any(word in lower_type for word in STRENGTH_KEYWORDS):
        return "strength"
    if any(word in lower_type for word in ENDURANCE_KEYWORDS):
        return "cardio"

    if any(word in lower_notes for word in STRENGTH_NOTE_KEYWORDS):
        return "strength"
    if any(word in lower_notes for word in CARDIO_NOTE_KEYWORDS):
        return "cardio"

    return "balanced"
