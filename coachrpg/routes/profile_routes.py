# coachrpg/routes/profile_routes.py
from flask import Blueprint, current_app, request, jsonify
from flask_jwt_extended import jwt_required

from .. import db
from ..auth import current_user_id
from ..models.user import ClientProfile

profile_bp = Blueprint("profile", __name__)

ENUM_FIELDS = {
    "height_unit": ("inches", "centimeters"),
    "weight_unit": ("pounds", "kilograms"),
}

POSITIVE_FIELDS = (
    "age",
    "height",
    "current_weight",
    "average_sleep_hours",
    "exercise_days_per_week",
    "sessions_per_month",
)


def _coerce(name, value, expected):
    """Validate one profile field; returns (value, error)."""
    if value is None:
        return None, None

    if expected is bool:
        if not isinstance(value, bool):
            return None, f"{name} must be a boolean"
        return value, None

    if expected in (int, float):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None, f"{name} must be a number"
        if expected is int and not float(value).is_integer():
            return None, f"{name} must be an integer"
        if name in POSITIVE_FIELDS and value <= 0:
            return None, f"{name} must be positive"
        return expected(value), None

    if not isinstance(value, str):
        return None, f"{name} must be a string"
    if name in ENUM_FIELDS and value not in ENUM_FIELDS[name]:
        return None, f"invalid {name}"
    return value, None


@profile_bp.route("", methods=["GET"])
@jwt_required()
def get_profile():
    profile = ClientProfile.query.filter_by(user_id=current_user_id()).first()
    if not profile:
        return jsonify({"message": "Profile not found"}), 404

    return jsonify(
        {
            "profile": profile.to_dict(),
            "user": {"email": profile.user.email, "role": profile.user.role},
        }
    ), 200


@profile_bp.route("", methods=["PUT"])
@jwt_required()
def update_profile():
    profile = ClientProfile.query.filter_by(user_id=current_user_id()).first()
    if not profile:
        return jsonify({"message": "Profile not found"}), 404

    data = request.get_json(silent=True) or {}

    updates = {}
    for name, expected in ClientProfile.EDITABLE_FIELDS.items():
        if name not in data:
            continue
        value, error = _coerce(name, data[name], expected)
        if error:
            return jsonify({"message": error}), 400
        updates[name] = value

    for name, value in updates.items():
        setattr(profile, name, value)

    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Update profile error: {e}")
        return jsonify({"message": "Failed to update profile", "error": str(e)}), 500

    return jsonify(
        {"message": "Profile updated successfully", "profile": profile.to_dict()}
    ), 200
