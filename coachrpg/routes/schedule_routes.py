# coachrpg/routes/schedule_routes.py
from datetime import datetime

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required

from .. import db
from ..auth import admin_required, current_role, current_user_id
from ..models.appointment import (
    Appointment,
    APPOINTMENT_STATUSES,
    FOCUS_TYPES,
    SESSION_TYPES,
)
from ..models.user import User, ROLE_CLIENT
from ..rpg.session_integration import on_session_complete
from .helpers import parse_datetime

schedule_bp = Blueprint("schedule", __name__)

MIN_DURATION = 15
MAX_DURATION = 180


def _valid_duration(v) -> bool:
    return isinstance(v, int) and not isinstance(v, bool) and MIN_DURATION <= v <= MAX_DURATION


def _no_cache(response):
    response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
    response.headers["Pragma"] = "no-cache"
    response.headers["Expires"] = "0"
    return response


# ------------------------------
# GET /api/schedule
# Clients see their own sessions; admins see all (or ?client_id=)
# ------------------------------
@schedule_bp.route("", methods=["GET"])
@jwt_required()
def list_sessions():
    q = Appointment.query

    if current_role() == ROLE_CLIENT:
        q = q.filter(Appointment.client_id == current_user_id())
    elif request.args.get("client_id"):
        q = q.filter(Appointment.client_id == request.args.get("client_id", type=int))

    status = request.args.get("status")
    if status:
        if status not in APPOINTMENT_STATUSES:
            return jsonify({"message": "invalid status"}), 400
        q = q.filter(Appointment.status == status)

    start = parse_datetime(request.args.get("from"))
    end = parse_datetime(request.args.get("to"))
    if start:
        q = q.filter(Appointment.date_time >= start)
    if end:
        q = q.filter(Appointment.date_time <= end)

    rows = q.order_by(Appointment.date_time.asc()).all()
    return _no_cache(jsonify({"appointments": [a.to_dict() for a in rows]})), 200


# ------------------------------
# POST /api/schedule  (admin)
# ------------------------------
@schedule_bp.route("", methods=["POST"])
@admin_required
def create_session():
    """
    Body:
    {
      "client_id": 2,
      "date_time": "2025-01-20T10:00:00",
      "duration": 60,
      "session_type": "ONE_ON_ONE",
      "focus_type": "STRENGTH",       # optional
      "location": "...", "notes": "...", "client_notes": "..."
    }
    """
    data = request.get_json(silent=True) or {}

    client = db.session.get(User, data.get("client_id")) if data.get("client_id") else None
    if not client or client.role != ROLE_CLIENT:
        return jsonify({"message": "client not found"}), 404

    date_time = parse_datetime(data.get("date_time"))
    if not date_time:
        return jsonify({"message": "date_time is required"}), 400

    if not _valid_duration(data.get("duration")):
        return jsonify({"message": f"duration must be {MIN_DURATION}-{MAX_DURATION} minutes"}), 400

    if data.get("session_type") not in SESSION_TYPES:
        return jsonify({"message": "invalid session_type"}), 400

    focus_type = data.get("focus_type")
    if focus_type is not None and focus_type not in FOCUS_TYPES:
        return jsonify({"message": "invalid focus_type"}), 400

    try:
        appointment = Appointment(
            client_id=client.id,
            admin_id=current_user_id(),
            date_time=date_time,
            duration=data["duration"],
            session_type=data["session_type"],
            focus_type=focus_type,
            workout_type="COACHED",
            location=data.get("location"),
            notes=data.get("notes"),
            client_notes=data.get("client_notes"),
            status="CONFIRMED",  # admin-created sessions are auto-confirmed
            booked_by="ADMIN",
        )
        db.session.add(appointment)
        db.session.commit()

        return jsonify({"appointment": appointment.to_dict()}), 201

    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Session creation error: {e}")
        return jsonify({"message": "Failed to create session", "error": str(e)}), 500


# ------------------------------
# GET /api/schedule/<id>
# ------------------------------
@schedule_bp.route("/<int:appointment_id>", methods=["GET"])
@jwt_required()
def get_session(appointment_id):
    appointment = db.session.get(Appointment, appointment_id)
    if not appointment:
        return jsonify({"message": "Session not found"}), 404

    if current_role() != "ADMIN" and appointment.client_id != current_user_id():
        return jsonify({"message": "Forbidden"}), 403

    return jsonify({"appointment": appointment.to_dict()}), 200


# ------------------------------
# PUT /api/schedule/<id>  (admin)
# Marking a session COMPLETED triggers the RPG updates.
# ------------------------------
@schedule_bp.route("/<int:appointment_id>", methods=["PUT"])
@admin_required
def update_session(appointment_id):
    appointment = db.session.get(Appointment, appointment_id)
    if not appointment:
        return jsonify({"message": "Session not found"}), 404

    data = request.get_json(silent=True) or {}

    if "date_time" in data:
        date_time = parse_datetime(data.get("date_time"))
        if not date_time:
            return jsonify({"message": "invalid date_time"}), 400
        appointment.date_time = date_time

    if "duration" in data:
        if not _valid_duration(data.get("duration")):
            return jsonify({"message": f"duration must be {MIN_DURATION}-{MAX_DURATION} minutes"}), 400
        appointment.duration = data["duration"]

    if "session_type" in data:
        if data["session_type"] not in SESSION_TYPES:
            return jsonify({"message": "invalid session_type"}), 400
        appointment.session_type = data["session_type"]

    if "focus_type" in data:
        if data["focus_type"] is not None and data["focus_type"] not in FOCUS_TYPES:
            return jsonify({"message": "invalid focus_type"}), 400
        appointment.focus_type = data["focus_type"]

    for field in ("location", "notes", "client_notes", "cancel_reason"):
        if field in data:
            setattr(appointment, field, data[field])

    previous_status = appointment.status
    new_status = data.get("status")
    if new_status is not None:
        if new_status not in APPOINTMENT_STATUSES:
            return jsonify({"message": "invalid status"}), 400
        appointment.status = new_status
        if new_status == "CANCELLED" and not appointment.cancelled_at:
            appointment.cancelled_at = datetime.utcnow()

    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Session update error: {e}")
        return jsonify({"message": "Failed to update session", "error": str(e)}), 500

    payload = {"appointment": appointment.to_dict()}

    if new_status == "COMPLETED" and previous_status != "COMPLETED":
        rpg_result = on_session_complete(
            appointment.id,
            appointment.client_id,
            appointment.focus_type,
            appointment.workout_type,
        )
        if rpg_result["success"]:
            payload["rpg"] = rpg_result
        else:
            # the session itself is saved; RPG failure is non-fatal here
            current_app.logger.error(
                f"RPG update failed for session {appointment.id}: {rpg_result['error']}"
            )

    return jsonify(payload), 200


# ------------------------------
# DELETE /api/schedule/<id>?reason=...  (admin)
# Soft delete: the session is cancelled, not removed.
# ------------------------------
@schedule_bp.route("/<int:appointment_id>", methods=["DELETE"])
@admin_required
def cancel_session(appointment_id):
    appointment = db.session.get(Appointment, appointment_id)
    if not appointment:
        return jsonify({"message": "Session not found"}), 404

    try:
        appointment.status = "CANCELLED"
        appointment.cancelled_at = datetime.utcnow()
        reason = request.args.get("reason")
        if reason:
            appointment.cancel_reason = reason
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Session deletion error: {e}")
        return jsonify({"message": "Failed to cancel session", "error": str(e)}), 500

    return jsonify({"appointment": appointment.to_dict()}), 200
