# coachrpg/rpg/customization.py
"""
Avatar customization options and level gating.

Options without a `requires_level` are available from level 1.
"""
from typing import Any, Dict, List

DEFAULT_CUSTOMIZATION = {
    "skin_tone": "#F0D0B0",
    "hair_style": "short",
    "hair_color": "#2C1810",
    "facial_hair": "clean",
    "eye_color": "#4A3728",
    "outfit": "tee",
    "color_scheme": "navy",
}

SKIN_TONES = [
    {"id": "light", "name": "Light", "color": "#F0D0B0"},
    {"id": "fair", "name": "Fair", "color": "#E8C4A0"},
    {"id": "medium", "name": "Medium", "color": "#D4A574"},
    {"id": "tan", "name": "Tan", "color": "#C68642"},
    {"id": "brown", "name": "Brown", "color": "#8D5524"},
    {"id": "dark", "name": "Dark", "color": "#5C3317"},
    # fantasy tones
    {"id": "gold", "name": "Golden", "color": "#FFD700", "requires_level": 25},
    {"id": "silver", "name": "Silver", "color": "#C0C0C0", "requires_level": 30},
]

HAIR_STYLES = [
    {"id": "short", "name": "Short", "requires_level": 1},
    {"id": "buzz", "name": "Buzz Cut", "requires_level": 1},
    {"id": "bald", "name": "Bald", "requires_level": 1},
    {"id": "medium", "name": "Medium", "requires_level": 1},
    {"id": "long", "name": "Long", "requires_level": 5},
    {"id": "mohawk", "name": "Mohawk", "requires_level": 10},
    {"id": "afro", "name": "Afro", "requires_level": 10},
    {"id": "dreads", "name": "Dreads", "requires_level": 15},
    {"id": "ponytail", "name": "Ponytail", "requires_level": 15},
    {"id": "spiky", "name": "Spiky", "requires_level": 20},
]

HAIR_COLORS = [
    {"id": "black", "name": "Black", "color": "#2C1810"},
    {"id": "brown", "name": "Brown", "color": "#4E3629"},
    {"id": "blonde", "name": "Blonde", "color": "#F4E4C1"},
    {"id": "red", "name": "Red", "color": "#A52A2A"},
    {"id": "gray", "name": "Gray", "color": "#808080"},
    {"id": "white", "name": "White", "color": "#F5F5F5"},
    {"id": "blue", "name": "Blue", "color": "#4169E1", "requires_level": 20},
    {"id": "green", "name": "Green", "color": "#00FF00", "requires_level": 20},
    {"id": "purple", "name": "Purple", "color": "#9370DB", "requires_level": 25},
    {"id": "pink", "name": "Pink", "color": "#FF69B4", "requires_level": 25},
]

FACIAL_HAIR = [
    {"id": "clean", "name": "Clean Shaven"},
    {"id": "stubble", "name": "Stubble"},
    {"id": "goatee", "name": "Goatee"},
    {"id": "beard", "name": "Full Beard"},
    {"id": "mustache", "name": "Mustache"},
    {"id": "van-dyke", "name": "Van Dyke"},
]

EYE_COLORS = [
    {"id": "brown", "name": "Brown", "color": "#4A3728"},
    {"id": "blue", "name": "Blue", "color": "#4169E1"},
    {"id": "green", "name": "Green", "color": "#00A86B"},
    {"id": "hazel", "name": "Hazel", "color": "#8E7618"},
    {"id": "gray", "name": "Gray", "color": "#708090"},
    {"id": "amber", "name": "Amber", "color": "#FFBF00"},
]

OUTFITS = [
    {"id": "tee", "name": "T-Shirt", "requires_level": 1},
    {"id": "tank", "name": "Tank Top", "requires_level": 1},
    {"id": "compression", "name": "Compression Shirt", "requires_level": 10},
    {"id": "hoodie", "name": "Hoodie", "requires_level": 15},
    {"id": "jersey", "name": "Jersey", "requires_level": 20},
    {"id": "muscle", "name": "Muscle Tee", "requires_level": 25},
]

COLOR_SCHEMES = [
    {"id": "navy", "name": "Navy Blue", "primary": "#1A2332", "secondary": "#E8DCC4", "accent": "#00D9FF"},
    {"id": "black", "name": "Black", "primary": "#000000", "secondary": "#FFFFFF", "accent": "#FF0000"},
    {"id": "red", "name": "Red", "primary": "#DC2626", "secondary": "#FEE2E2", "accent": "#991B1B"},
    {"id": "blue", "name": "Blue", "primary": "#2563EB", "secondary": "#DBEAFE", "accent": "#1E40AF"},
    {"id": "green", "name": "Green", "primary": "#059669", "secondary": "#D1FAE5", "accent": "#047857", "requires_level": 10},
    {"id": "purple", "name": "Purple", "primary": "#7C3AED", "secondary": "#EDE9FE", "accent": "#6D28D9", "requires_level": 15},
    {"id": "orange", "name": "Orange", "primary": "#EA580C", "secondary": "#FED7AA", "accent": "#C2410C", "requires_level": 20},
]

# selection key -> catalog matched by option id; colour-valued keys also match by hex
OPTION_CATALOGS = {
    "skin_tone": SKIN_TONES,
    "hair_style": HAIR_STYLES,
    "hair_color": HAIR_COLORS,
    "facial_hair": FACIAL_HAIR,
    "eye_color": EYE_COLORS,
    "outfit": OUTFITS,
    "color_scheme": COLOR_SCHEMES,
}


def is_option_unlocked(requires_level, current_level: int) -> bool:
    if not requires_level:
        return True
    return current_level >= requires_level


def available_options(options: List[Dict[str, Any]], level: int) -> List[Dict[str, Any]]:
    return [opt for opt in options if is_option_unlocked(opt.get("requires_level"), level)]


def parse_avatar_config(config) -> Dict[str, Any]:
    """Normalize a stored avatar config, falling back to defaults per key."""
    if not config or not isinstance(config, dict):
        return dict(DEFAULT_CUSTOMIZATION)

    return {key: config.get(key) or default for key, default in DEFAULT_CUSTOMIZATION.items()}


def _find_option(catalog, value):
    for opt in catalog:
        if opt["id"] == value or opt.get("color") == value:
            return opt
    return None


def unknown_selections(config: Dict[str, Any]) -> List[str]:
    """Keys of `config` whose value matches no option in its catalog."""
    return [
        key
        for key, value in config.items()
        if key in OPTION_CATALOGS and _find_option(OPTION_CATALOGS[key], value) is None
    ]


def locked_selections(config: Dict[str, Any], level: int) -> List[str]:
    """Keys of `config` whose selected option needs a higher level."""
    locked = []
    for key, value in config.items():
        catalog = OPTION_CATALOGS.get(key)
        if not catalog:
            continue
        opt = _find_option(catalog, value)
        if opt and opt not in available_options(catalog, level):
            locked.append(key)
    return locked


def customization_catalog(level: int) -> Dict[str, Any]:
    """Every option group with an `unlocked` flag for the given level."""
    return {
        key: [
            dict(opt, unlocked=is_option_unlocked(opt.get("requires_level"), level))
            for opt in catalog
        ]
        for key, catalog in OPTION_CATALOGS.items()
    }
