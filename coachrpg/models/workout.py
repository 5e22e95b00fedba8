# coachrpg/models/workout.py
from datetime import datetime
from .. import db

WORKOUT_STATUSES = ("PLANNED", "IN_PROGRESS", "COMPLETED", "CANCELLED")
EXERCISE_CATEGORIES = ("STRENGTH", "CARDIO", "FLEXIBILITY", "BALANCE", "SPORT", "OTHER")


class Workout(db.Model):
    __tablename__ = "workouts"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    notes = db.Column(db.Text)
    date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    duration = db.Column(db.Integer)  # minutes
    type = db.Column(
        db.Enum("COACHED", "SELF_LOGGED", name="journal_workout_type_enum"),
        nullable=False,
        default="SELF_LOGGED",
    )
    status = db.Column(
        db.Enum(*WORKOUT_STATUSES, name="workout_status_enum"),
        nullable=False,
        default="COMPLETED",
    )
    focus_type = db.Column(
        db.Enum("STRENGTH", "CARDIO", "BALANCED", name="journal_focus_type_enum")
    )
    xp_awarded = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    user = db.relationship("User", backref="workouts")
    exercises = db.relationship(
        "WorkoutExercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="WorkoutExercise.order",
    )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "notes": self.notes,
            "date": self.date.isoformat() if self.date else None,
            "duration": self.duration,
            "type": self.type,
            "status": self.status,
            "focus_type": self.focus_type,
            "xp_awarded": self.xp_awarded or 0,
            "exercises": [ex.to_dict() for ex in self.exercises],
        }

    def to_summary_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "date": self.date.isoformat() if self.date else None,
            "type": self.type,
            "status": self.status,
            "focus_type": self.focus_type,
            "xp_awarded": self.xp_awarded or 0,
            "exercise_count": len(self.exercises),
        }


class WorkoutExercise(db.Model):
    __tablename__ = "workout_exercises"

    id = db.Column(db.Integer, primary_key=True)
    workout_id = db.Column(db.Integer, db.ForeignKey("workouts.id"), nullable=False)
    name = db.Column(db.String(200), nullable=False)
    category = db.Column(
        db.Enum(*EXERCISE_CATEGORIES, name="exercise_category_enum"),
        nullable=False,
        default="OTHER",
    )
    duration = db.Column(db.Integer)  # minutes, cardio
    distance = db.Column(db.Float)
    distance_unit = db.Column(db.Enum("km", "miles", "meters", name="distance_unit_enum"))
    notes = db.Column(db.Text)
    order = db.Column(db.Integer, nullable=False, default=0)

    workout = db.relationship("Workout", back_populates="exercises")
    sets = db.relationship(
        "WorkoutSet",
        back_populates="exercise",
        cascade="all, delete-orphan",
        order_by="WorkoutSet.set_number",
    )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "duration": self.duration,
            "distance": self.distance,
            "distance_unit": self.distance_unit,
            "notes": self.notes,
            "order": self.order,
            "sets": [s.to_dict() for s in self.sets],
        }


class WorkoutSet(db.Model):
    __tablename__ = "workout_sets"

    id = db.Column(db.Integer, primary_key=True)
    exercise_id = db.Column(db.Integer, db.ForeignKey("workout_exercises.id"), nullable=False)
    set_number = db.Column(db.Integer, nullable=False, default=1)
    reps = db.Column(db.Integer)
    weight = db.Column(db.Float)
    weight_unit = db.Column(
        db.Enum("lbs", "kg", "bodyweight", name="weight_unit_set_enum"),
        nullable=False,
        default="lbs",
    )
    duration = db.Column(db.Integer)  # seconds
    distance = db.Column(db.Float)
    completed = db.Column(db.Boolean, nullable=False, default=True)
    rpe = db.Column(db.Integer)
    notes = db.Column(db.String(500))

    exercise = db.relationship("WorkoutExercise", back_populates="sets")

    def to_dict(self):
        return {
            "id": self.id,
            "set_number": self.set_number,
            "reps": self.reps,
            "weight": self.weight,
            "weight_unit": self.weight_unit,
            "duration": self.duration,
            "distance": self.distance,
            "completed": self.completed,
            "rpe": self.rpe,
            "notes": self.notes,
        }
