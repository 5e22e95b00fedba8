# coachrpg/routes/admin_routes.py
from datetime import datetime, timedelta

from flask import Blueprint, jsonify, request
from sqlalchemy import or_

from .. import db
from ..auth import admin_required
from ..models.appointment import Appointment, ACTIVE_STATUSES
from ..models.character import RPGCharacter
from ..models.user import User, ClientProfile, ROLE_CLIENT
from ..rpg.levels import level_progress
from ..rpg.stats import stat_tiers
from ..rpg.streaks import streak_status

admin_bp = Blueprint("admin", __name__)


def _client_summary(user: User):
    data = user.to_dict()
    data["profile_completion"] = user.client_profile.completion() if user.client_profile else 0
    return data


def _streak_payload(status):
    last = status["last_workout_date"]
    return dict(status, last_workout_date=last.isoformat() if last else None)


# ------------------------------
# GET /api/admin/clients?search=
# ------------------------------
@admin_bp.route("/clients", methods=["GET"])
@admin_required
def list_clients():
    search = (request.args.get("search") or "").strip()

    q = User.query.outerjoin(ClientProfile).filter(User.role == ROLE_CLIENT)
    if search:
        pattern = f"%{search}%"
        q = q.filter(
            or_(
                User.email.ilike(pattern),
                ClientProfile.full_name.ilike(pattern),
            )
        )

    clients = q.order_by(User.created_at.desc(), User.id.desc()).all()

    response = jsonify({"clients": [_client_summary(u) for u in clients]})
    response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
    return response, 200


# ------------------------------
# GET /api/admin/clients/<id>
# ------------------------------
@admin_bp.route("/clients/<int:client_id>", methods=["GET"])
@admin_required
def get_client(client_id):
    user = db.session.get(User, client_id)
    if not user or user.role != ROLE_CLIENT:
        return jsonify({"message": "Client not found"}), 404

    appointments = (
        Appointment.query.filter_by(client_id=user.id)
        .order_by(Appointment.date_time.desc())
        .limit(10)
        .all()
    )

    character = RPGCharacter.query.filter_by(user_id=user.id).first()
    rpg = None
    if character:
        rpg = {
            "character": character.to_dict(),
            "progress": level_progress(character.xp),
            "tiers": stat_tiers(character.strength, character.endurance, character.discipline),
            "streak": _streak_payload(streak_status(user.id)),
        }

    return jsonify(
        {
            "client": _client_summary(user),
            "profile": user.client_profile.to_dict() if user.client_profile else None,
            "recent_sessions": [a.to_dict() for a in appointments],
            "rpg": rpg,
        }
    ), 200


# ------------------------------
# GET /api/admin/schedule/stats
# ------------------------------
@admin_bp.route("/schedule/stats", methods=["GET"])
@admin_required
def schedule_stats():
    now = datetime.now()
    start_of_today = datetime(now.year, now.month, now.day)
    # weeks start on Sunday
    start_of_week = start_of_today - timedelta(days=(start_of_today.weekday() + 1) % 7)
    start_of_month = datetime(now.year, now.month, 1)

    active = Appointment.status.in_(ACTIVE_STATUSES)

    total_upcoming = Appointment.query.filter(Appointment.date_time >= now, active).count()
    today_sessions = Appointment.query.filter(
        Appointment.date_time >= start_of_today,
        Appointment.date_time < start_of_today + timedelta(days=1),
        active,
    ).count()
    this_week_sessions = Appointment.query.filter(
        Appointment.date_time >= start_of_week, active
    ).count()
    this_month_sessions = Appointment.query.filter(
        Appointment.date_time >= start_of_month, active
    ).count()
    pending_approvals = Appointment.query.filter_by(status="PENDING_APPROVAL").count()

    recent = (
        Appointment.query.filter(Appointment.date_time >= now)
        .order_by(Appointment.date_time.asc())
        .limit(5)
        .all()
    )

    return jsonify(
        {
            "stats": {
                "total_upcoming": total_upcoming,
                "today_sessions": today_sessions,
                "this_week_sessions": this_week_sessions,
                "this_month_sessions": this_month_sessions,
                "pending_approvals": pending_approvals,
            },
            "recent_sessions": [a.to_dict() for a in recent],
        }
    ), 200
