# coachrpg/routes/client_routes.py
from datetime import datetime, time, timedelta

from flask import Blueprint, current_app, jsonify, request

from .. import db
from ..auth import client_required, current_user_id
from ..models.appointment import Appointment, FOCUS_TYPES, SESSION_TYPES
from ..rpg.session_integration import on_session_complete, WORKOUT_TYPE_SELF_LOGGED
from .helpers import parse_datetime, safe_int

client_bp = Blueprint("client", __name__)


# ------------------------------
# POST /api/client/booking
# Client requests a new session (status: PENDING_APPROVAL)
# ------------------------------
@client_bp.route("/booking", methods=["POST"])
@client_required
def create_booking():
    data = request.get_json(silent=True) or {}

    date_time = parse_datetime(data.get("date_time"))
    if not date_time:
        return jsonify({"message": "date_time is required"}), 400

    duration = data.get("duration")
    if not isinstance(duration, int) or isinstance(duration, bool) or not 15 <= duration <= 180:
        return jsonify({"message": "duration must be 15-180 minutes"}), 400

    if data.get("session_type") not in SESSION_TYPES:
        return jsonify({"message": "invalid session_type"}), 400

    if date_time <= datetime.now():
        return jsonify({"message": "Cannot book sessions in the past"}), 400

    try:
        appointment = Appointment(
            client_id=current_user_id(),
            date_time=date_time,
            duration=duration,
            session_type=data["session_type"],
            workout_type="COACHED",
            client_notes=data.get("client_notes"),
            status="PENDING_APPROVAL",
            booked_by="CLIENT",
        )
        db.session.add(appointment)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Booking creation error: {e}")
        return jsonify({"message": "Failed to create booking", "error": str(e)}), 500

    current_app.logger.info(
        f"New booking request: appointment={appointment.id} "
        f"client={appointment.client_id} date_time={appointment.date_time.isoformat()}"
    )
    return jsonify({"appointment": appointment.to_dict()}), 201


# ------------------------------
# POST /api/client/log-workout
# Client logs a solo workout (not with coach)
# ------------------------------
@client_bp.route("/log-workout", methods=["POST"])
@client_required
def log_workout():
    """
    Body:
    {
      "date": "2025-01-18T07:30:00",
      "focus_type": "STRENGTH" | "CARDIO" | "BALANCED",
      "duration": "45",          # optional, minutes
      "notes": "..."             # optional
    }
    """
    user_id = current_user_id()
    data = request.get_json(silent=True) or {}

    workout_date = parse_datetime(data.get("date"))
    if not workout_date:
        return jsonify({"message": "date is required"}), 400

    focus_type = data.get("focus_type")
    if focus_type not in FOCUS_TYPES:
        return jsonify({"message": "invalid focus_type"}), 400

    max_age = current_app.config.get("LOG_WORKOUT_MAX_AGE_DAYS", 7)
    now = datetime.now()
    earliest = now - timedelta(days=max_age)
    end_of_today = datetime.combine(now.date(), time.max)

    if workout_date < earliest or workout_date > end_of_today:
        return jsonify({"message": f"Date must be within the past {max_age} days"}), 400

    try:
        appointment = Appointment(
            client_id=user_id,
            date_time=workout_date,
            duration=safe_int(data.get("duration"), 60) if data.get("duration") else 60,
            session_type="ONE_ON_ONE",
            focus_type=focus_type,
            workout_type=WORKOUT_TYPE_SELF_LOGGED,
            status="COMPLETED",
            booked_by="CLIENT",
            client_notes=data.get("notes"),
        )
        db.session.add(appointment)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Log workout error: {e}")
        return jsonify({"message": "Failed to log workout", "error": str(e)}), 500

    rpg_result = on_session_complete(
        appointment.id,
        user_id,
        focus_type,
        WORKOUT_TYPE_SELF_LOGGED,
    )

    return jsonify(
        {
            "success": True,
            "appointment": appointment.to_dict(),
            "rpg": rpg_result,
        }
    ), 200
