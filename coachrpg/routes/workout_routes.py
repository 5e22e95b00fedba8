# coachrpg/routes/workout_routes.py

from typing import Any, Dict, List, Optional, Tuple

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required

from .. import db
from ..auth import current_role, current_user_id
from ..models.appointment import FOCUS_TYPES, WORKOUT_TYPES
from ..models.workout import (
    Workout,
    WorkoutExercise,
    WorkoutSet,
    EXERCISE_CATEGORIES,
    WORKOUT_STATUSES,
)
from ..rpg.session_integration import on_session_complete
from .helpers import parse_datetime, safe_int

workouts_bp = Blueprint("workouts", __name__)


# ------------------------------
# Helpers
# ------------------------------
def _build_exercises(raw: Any) -> Tuple[Optional[List[WorkoutExercise]], Optional[str]]:
    if not isinstance(raw, list):
        return None, "exercises must be a list"

    exercises = []
    for i, ex in enumerate(raw):
        if not isinstance(ex, dict):
            return None, f"exercise {i} must be an object"

        name = (ex.get("name") or "").strip()
        if not name:
            return None, f"exercise {i} needs a name"

        category = ex.get("category") or "OTHER"
        if category not in EXERCISE_CATEGORIES:
            return None, f"exercise {i} has invalid category"

        sets = []
        for j, s in enumerate(ex.get("sets") or []):
            if not isinstance(s, dict):
                return None, f"set {j} of exercise {i} must be an object"
            rpe = s.get("rpe")
            if rpe is not None and not (isinstance(rpe, int) and 1 <= rpe <= 10):
                return None, f"set {j} of exercise {i} has invalid rpe"
            sets.append(
                WorkoutSet(
                    set_number=safe_int(s.get("set_number"), j + 1),
                    reps=s.get("reps"),
                    weight=s.get("weight"),
                    weight_unit=s.get("weight_unit") or "lbs",
                    duration=s.get("duration"),
                    distance=s.get("distance"),
                    completed=bool(s.get("completed", True)),
                    rpe=rpe,
                    notes=s.get("notes"),
                )
            )

        exercises.append(
            WorkoutExercise(
                name=name,
                category=category,
                duration=ex.get("duration"),
                distance=ex.get("distance"),
                distance_unit=ex.get("distance_unit"),
                notes=ex.get("notes"),
                order=safe_int(ex.get("order"), i),
                sets=sets,
            )
        )

    return exercises, None


def _validate_enums(data: Dict[str, Any]) -> Optional[str]:
    if "type" in data and data["type"] not in WORKOUT_TYPES:
        return "invalid type"
    if "status" in data and data["status"] not in WORKOUT_STATUSES:
        return "invalid status"
    if data.get("focus_type") is not None and data["focus_type"] not in FOCUS_TYPES:
        return "invalid focus_type"
    return None


def _owned_workout(workout_id: int):
    """Returns (workout, error_response)."""
    workout = db.session.get(Workout, workout_id)
    if not workout:
        return None, (jsonify({"message": "Workout not found"}), 404)
    if workout.user_id != current_user_id() and current_role() != "ADMIN":
        return None, (jsonify({"message": "Forbidden"}), 403)
    return workout, None


def _apply_rpg(workout: Workout) -> Dict[str, Any]:
    rpg_result = on_session_complete(
        f"workout-{workout.id}",
        workout.user_id,
        workout.focus_type,
        workout.type,
    )
    if rpg_result["success"]:
        workout.xp_awarded = rpg_result["xp_awarded"]
        db.session.commit()
    return rpg_result


# ------------------------------
# GET /api/workouts?limit=&offset=&status=&focus_type=&from=&to=&order=
# ------------------------------
@workouts_bp.route("", methods=["GET"])
@jwt_required()
def list_workouts():
    limit = max(1, min(safe_int(request.args.get("limit"), 20), 100))
    offset = max(0, safe_int(request.args.get("offset"), 0))

    q = Workout.query.filter_by(user_id=current_user_id())

    status = request.args.get("status")
    if status:
        q = q.filter(Workout.status == status)
    focus_type = request.args.get("focus_type")
    if focus_type:
        q = q.filter(Workout.focus_type == focus_type)

    start = parse_datetime(request.args.get("from"))
    end = parse_datetime(request.args.get("to"))
    if start:
        q = q.filter(Workout.date >= start)
    if end:
        q = q.filter(Workout.date <= end)

    total = q.count()
    order_col = Workout.created_at if request.args.get("order_by") == "created_at" else Workout.date
    order_col = order_col.asc() if request.args.get("order") == "asc" else order_col.desc()

    rows = q.order_by(order_col).offset(offset).limit(limit).all()

    return jsonify(
        {
            "workouts": [w.to_summary_dict() for w in rows],
            "pagination": {
                "total": total,
                "limit": limit,
                "offset": offset,
                "has_more": offset + limit < total,
            },
        }
    ), 200


# ------------------------------
# POST /api/workouts
# ------------------------------
@workouts_bp.route("", methods=["POST"])
@jwt_required()
def create_workout():
    """
    Body:
    {
      "name": "Leg day",
      "date": "2025-01-18T07:30:00",
      "type": "SELF_LOGGED", "status": "COMPLETED", "focus_type": "STRENGTH",
      "duration": 50, "notes": "...",
      "exercises": [
        {"name": "Squat", "category": "STRENGTH",
         "sets": [{"set_number": 1, "reps": 5, "weight": 100, "weight_unit": "kg"}]}
      ]
    }
    """
    data = request.get_json(silent=True) or {}

    name = (data.get("name") or "").strip()
    if not name:
        return jsonify({"message": "name is required"}), 400

    date = parse_datetime(data.get("date"))
    if not date:
        return jsonify({"message": "date is required"}), 400

    error = _validate_enums(data)
    if error:
        return jsonify({"message": error}), 400

    exercises, error = _build_exercises(data.get("exercises"))
    if error:
        return jsonify({"message": error}), 400
    if not exercises:
        return jsonify({"message": "At least one exercise is required"}), 400

    try:
        workout = Workout(
            user_id=current_user_id(),
            name=name,
            notes=data.get("notes"),
            date=date,
            duration=data.get("duration"),
            type=data.get("type") or "SELF_LOGGED",
            status=data.get("status") or "COMPLETED",
            focus_type=data.get("focus_type"),
            exercises=exercises,
        )
        db.session.add(workout)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Error creating workout: {e}")
        return jsonify({"message": "Failed to create workout", "error": str(e)}), 500

    payload = {"message": "Workout created successfully", "workout": None, "xp_awarded": 0}
    if workout.status == "COMPLETED":
        rpg_result = _apply_rpg(workout)
        payload["rpg"] = rpg_result
        payload["xp_awarded"] = workout.xp_awarded

    payload["workout"] = workout.to_dict()
    return jsonify(payload), 201


# ------------------------------
# GET /api/workouts/<id>
# ------------------------------
@workouts_bp.route("/<int:workout_id>", methods=["GET"])
@jwt_required()
def get_workout(workout_id):
    workout, error = _owned_workout(workout_id)
    if error:
        return error
    return jsonify({"workout": workout.to_dict()}), 200


# ------------------------------
# PUT /api/workouts/<id>
# Completing a workout that was not completed before triggers the RPG updates.
# ------------------------------
@workouts_bp.route("/<int:workout_id>", methods=["PUT"])
@jwt_required()
def update_workout(workout_id):
    workout, error = _owned_workout(workout_id)
    if error:
        return error

    data = request.get_json(silent=True) or {}

    error = _validate_enums(data)
    if error:
        return jsonify({"message": error}), 400

    if "name" in data:
        name = (data.get("name") or "").strip()
        if not name:
            return jsonify({"message": "name cannot be empty"}), 400
        workout.name = name

    if "date" in data:
        date = parse_datetime(data.get("date"))
        if not date:
            return jsonify({"message": "invalid date"}), 400
        workout.date = date

    for field in ("notes", "duration", "type", "focus_type"):
        if field in data:
            setattr(workout, field, data[field])

    if "exercises" in data:
        exercises, error = _build_exercises(data.get("exercises"))
        if error:
            return jsonify({"message": error}), 400
        workout.exercises = exercises

    was_completed = workout.status == "COMPLETED"
    if "status" in data:
        workout.status = data["status"]

    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Error updating workout {workout_id}: {e}")
        return jsonify({"message": "Failed to update workout", "error": str(e)}), 500

    payload = {"message": "Workout updated successfully"}
    # a workout earns RPG rewards once, even if it is reopened and completed again
    if workout.status == "COMPLETED" and not was_completed and not workout.xp_awarded:
        payload["rpg"] = _apply_rpg(workout)

    payload["workout"] = workout.to_dict()
    return jsonify(payload), 200


# ------------------------------
# DELETE /api/workouts/<id>
# XP already awarded for the workout is kept.
# ------------------------------
@workouts_bp.route("/<int:workout_id>", methods=["DELETE"])
@jwt_required()
def delete_workout(workout_id):
    workout, error = _owned_workout(workout_id)
    if error:
        return error

    try:
        db.session.delete(workout)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Error deleting workout {workout_id}: {e}")
        return jsonify({"message": "Failed to delete workout", "error": str(e)}), 500

    return jsonify({"message": "Workout deleted successfully"}), 200
