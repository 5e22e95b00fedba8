"""Tests for avatar customization gating"""
from coachrpg.rpg.customization import (
    DEFAULT_CUSTOMIZATION,
    HAIR_STYLES,
    available_options,
    customization_catalog,
    is_option_unlocked,
    locked_selections,
    parse_avatar_config,
    unknown_selections,
)


def test_is_option_unlocked():
    assert is_option_unlocked(None, 1) is True
    assert is_option_unlocked(10, 9) is False
    assert is_option_unlocked(10, 10) is True


def test_available_options_by_level():
    ids = [opt["id"] for opt in available_options(HAIR_STYLES, 5)]
    assert "long" in ids
    assert "mohawk" not in ids


def test_parse_avatar_config_fills_defaults():
    assert parse_avatar_config(None) == DEFAULT_CUSTOMIZATION
    assert parse_avatar_config("not a dict") == DEFAULT_CUSTOMIZATION

    parsed = parse_avatar_config({"hair_style": "bald", "outfit": "", "unknown": 1})
    assert parsed["hair_style"] == "bald"
    assert parsed["outfit"] == DEFAULT_CUSTOMIZATION["outfit"]
    assert "unknown" not in parsed


def test_locked_selections_match_id_and_colour():
    config = {"hair_style": "spiky", "skin_tone": "#FFD700", "outfit": "tee"}
    assert locked_selections(config, 1) == ["hair_style", "skin_tone"]
    assert locked_selections(config, 25) == []


def test_catalog_flags_every_option():
    catalog = customization_catalog(10)
    assert set(catalog) == set(DEFAULT_CUSTOMIZATION)
    compression = next(o for o in catalog["outfit"] if o["id"] == "compression")
    assert compression["unlocked"] is True


def test_unknown_selections():
    assert unknown_selections(DEFAULT_CUSTOMIZATION) == []
    assert unknown_selections({"hair_style": "anything", "eye_color": "#4169E1"}) == ["hair_style"]
