# coachrpg/routes/rpg_routes.py
from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required

from .. import db
from ..auth import admin_required, current_role, current_user_id
from ..models.appointment import Appointment
from ..models.character import RPGCharacter
from ..models.user import User
from ..rpg.customization import (
    DEFAULT_CUSTOMIZATION,
    customization_catalog,
    locked_selections,
    parse_avatar_config,
    unknown_selections,
)
from ..rpg.levels import level_progress, level_tier
from ..rpg.session_integration import on_session_complete
from ..rpg.stats import set_stats, stat_labels, stat_tiers
from ..rpg.streaks import streak_status
from ..rpg.xp import award_xp, initialize_character, xp_history
from .helpers import safe_int

rpg_bp = Blueprint("rpg", __name__)


def _is_int(v) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _character_overview(character: RPGCharacter):
    status = streak_status(character.user_id)
    last = status["last_workout_date"]
    return {
        "character": character.to_dict(),
        "level_tier": level_tier(character.level),
        "progress": level_progress(character.xp),
        "tiers": stat_tiers(character.strength, character.endurance, character.discipline),
        "labels": stat_labels(character.strength, character.endurance, character.discipline),
        "streak": dict(status, last_workout_date=last.isoformat() if last else None),
        "customization": parse_avatar_config(character.avatar_config),
    }


# ------------------------------
# POST /api/rpg/initialize  (admin)
# ------------------------------
@rpg_bp.route("/initialize", methods=["POST"])
@admin_required
def initialize():
    data = request.get_json(silent=True) or {}
    user_id = data.get("user_id")
    if not user_id:
        return jsonify({"message": "Missing user_id"}), 400

    if not db.session.get(User, user_id):
        return jsonify({"message": "user not found"}), 404

    try:
        character = initialize_character(user_id)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Error in /api/rpg/initialize: {e}")
        return jsonify({"message": "Failed to initialize character", "error": str(e)}), 500

    return jsonify({"success": True, "character": character.to_dict()}), 200


# ------------------------------
# POST /api/rpg/award-xp  (admin)
# ------------------------------
@rpg_bp.route("/award-xp", methods=["POST"])
@admin_required
def award():
    """
    Body: { "user_id": 2, "amount": 50, "source": "...", "reference_id": "...", "note": "..." }
    """
    data = request.get_json(silent=True) or {}
    user_id = data.get("user_id")
    amount = data.get("amount")

    if not user_id or not _is_int(amount):
        return jsonify({"message": "Missing user_id or amount"}), 400

    # CharacterNotFound propagates to the app-level 404 handler
    result = award_xp(
        user_id,
        amount,
        data.get("source") or "admin_manual",
        data.get("reference_id"),
        data.get("note"),
    )
    db.session.commit()

    return jsonify(dict(result, success=True)), 200


# ------------------------------
# POST /api/rpg/set-stats  (admin, testing tool)
# ------------------------------
@rpg_bp.route("/set-stats", methods=["POST"])
@admin_required
def set_character_stats():
    data = request.get_json(silent=True) or {}
    user_id = data.get("user_id")
    values = [data.get("strength"), data.get("endurance"), data.get("discipline")]

    if not user_id or not all(_is_int(v) for v in values):
        return jsonify({"message": "Missing required fields"}), 400

    character = set_stats(user_id, *values)
    db.session.commit()

    return jsonify({"success": True, "character": character.to_dict()}), 200


# ------------------------------
# POST /api/rpg/session-complete  (admin)
# ------------------------------
@rpg_bp.route("/session-complete", methods=["POST"])
@admin_required
def session_complete():
    data = request.get_json(silent=True) or {}
    session_id = data.get("session_id")
    if not session_id:
        return jsonify({"message": "Missing session_id"}), 400

    appointment = db.session.get(Appointment, session_id)
    if not appointment:
        return jsonify({"message": "Session not found"}), 404

    if appointment.status != "COMPLETED":
        return jsonify({"message": "Session must be marked COMPLETED first"}), 400

    result = on_session_complete(
        appointment.id,
        appointment.client_id,
        appointment.focus_type or appointment.session_type,
        appointment.workout_type,
    )

    if not result["success"]:
        return jsonify({"message": "Failed to process RPG updates", "error": result["error"]}), 500

    return jsonify({"success": True, "result": result}), 200


# ------------------------------
# GET /api/rpg/customize
# ------------------------------
@rpg_bp.route("/customize", methods=["GET"])
@jwt_required()
def get_customization():
    character = RPGCharacter.query.filter_by(user_id=current_user_id()).first()
    level = character.level if character else 1
    customization = (
        parse_avatar_config(character.avatar_config) if character else dict(DEFAULT_CUSTOMIZATION)
    )

    return jsonify(
        {
            "customization": customization,
            "level": level,
            "options": customization_catalog(level),
        }
    ), 200


# ------------------------------
# POST /api/rpg/customize
# ------------------------------
@rpg_bp.route("/customize", methods=["POST"])
@jwt_required()
def save_customization():
    character = RPGCharacter.query.filter_by(user_id=current_user_id()).first()
    if not character:
        return jsonify({"message": "RPG character not found. Complete a session first!"}), 404

    data = request.get_json(silent=True) or {}
    updates = {k: v for k, v in data.items() if k in DEFAULT_CUSTOMIZATION}

    unknown = unknown_selections(updates)
    if unknown:
        return jsonify({"message": "Unknown customization options", "invalid": unknown}), 400

    locked = locked_selections(updates, character.level)
    if locked:
        return jsonify(
            {"message": "Some selections are locked at your level", "locked": locked}
        ), 403

    merged = dict(parse_avatar_config(character.avatar_config), **updates)

    try:
        character.avatar_config = merged
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Customize avatar error: {e}")
        return jsonify({"message": "Failed to save customization", "error": str(e)}), 500

    return jsonify(
        {"success": True, "customization": parse_avatar_config(character.avatar_config)}
    ), 200


# ------------------------------
# GET /api/rpg/character  (admins may pass ?user_id=)
# ------------------------------
@rpg_bp.route("/character", methods=["GET"])
@jwt_required()
def get_character():
    user_id = _target_user_id()
    character = RPGCharacter.query.filter_by(user_id=user_id).first()
    if not character:
        return jsonify({"message": "Character not found"}), 404

    return jsonify(_character_overview(character)), 200


# ------------------------------
# GET /api/rpg/xp-history?limit=50
# ------------------------------
@rpg_bp.route("/xp-history", methods=["GET"])
@jwt_required()
def get_xp_history():
    limit = max(1, min(safe_int(request.args.get("limit"), 50), 200))
    entries = xp_history(_target_user_id(), limit=limit)
    return jsonify({"history": [e.to_dict() for e in entries]}), 200


# ------------------------------
# GET /api/rpg/streak
# ------------------------------
@rpg_bp.route("/streak", methods=["GET"])
@jwt_required()
def get_streak():
    status = streak_status(_target_user_id())
    last = status["last_workout_date"]
    return jsonify(dict(status, last_workout_date=last.isoformat() if last else None)), 200


def _target_user_id() -> int:
    requested = request.args.get("user_id", type=int)
    if requested and current_role() == "ADMIN":
        return requested
    return current_user_id()
