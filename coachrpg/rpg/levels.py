# coachrpg/rpg/levels.py
"""
Leveling table.

XP per level by tier:
  - Levels 1-5:   100 XP each
  - Levels 6-10:  200 XP each
  - Levels 11-20: 400 XP each
  - Levels 21-30: 600 XP each
  - Levels 31-50: 800 XP each
"""
from typing import Dict, List

MAX_LEVEL = 50

# (max_level_in_tier, xp_per_level)
LEVEL_TIERS = (
    (5, 100),
    (10, 200),
    (20, 400),
    (30, 600),
    (MAX_LEVEL, 800),
)

LEVEL_UNLOCKS = {
    5: ["Avatar accessories unlocked"],
    10: ["Advanced avatar customization unlocked"],
    15: ["Elite outfit tier unlocked"],
    20: ["Legendary cosmetics unlocked", "Master title unlocked"],
    25: ["Custom quest creation unlocked"],
}


def _cost_of_level(level: int) -> int:
    """XP needed to go from `level` to `level + 1`."""
    for max_level, xp_per_level in LEVEL_TIERS:
        if level <= max_level:
            return xp_per_level
    return LEVEL_TIERS[-1][1]


def xp_for_level(level: int) -> int:
    """Cumulative XP required to reach `level` (0 for level <= 1)."""
    if level <= 1:
        return 0
    return sum(_cost_of_level(i) for i in range(1, level))


def level_for_xp(xp: int) -> int:
    level = 1
    while level < MAX_LEVEL and xp >= xp_for_level(level + 1):
        level += 1
    return level


def level_progress(xp: int) -> Dict[str, int]:
    """
    Progress inside the current level:
        {"current": xp into level, "required": xp span of level, "percentage": 0-100}

    At MAX_LEVEL there is no next level: required is 0 and percentage is 100.
    """
    level = level_for_xp(xp)
    level_start = xp_for_level(level)
    current = xp - level_start

    if level >= MAX_LEVEL:
        return {"current": current, "required": 0, "percentage": 100}

    required = xp_for_level(level + 1) - level_start
    return {
        "current": current,
        "required": required,
        "percentage": (current * 100) // required,
    }


def will_level_up(current_xp: int, xp_to_add: int) -> bool:
    return level_for_xp(current_xp + xp_to_add) > level_for_xp(current_xp)


def level_tier(level: int) -> str:
    if level >= 31:
        return "MASTER"
    if level >= 21:
        return "ELITE"
    if level >= 11:
        return "ADVANCED"
    if level >= 6:
        return "INTERMEDIATE"
    return "BEGINNER"


def level_unlocks(level: int) -> List[str]:
    return list(LEVEL_UNLOCKS.get(level, []))


def unlocks_between(old_level: int, new_level: int) -> List[str]:
    """Unlock texts for every level in (old_level, new_level]."""
    unlocks = []
    for level in range(old_level + 1, new_level + 1):
        unlocks.extend(level_unlocks(level))
    return unlocks
