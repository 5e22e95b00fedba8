# coachrpg/models/user.py
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from .. import db

ROLE_ADMIN = "ADMIN"
ROLE_CLIENT = "CLIENT"


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.Enum(ROLE_ADMIN, ROLE_CLIENT, name="user_role_enum"),
        nullable=False,
        default=ROLE_CLIENT,
    )

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    client_profile = db.relationship(
        "ClientProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role,
            "full_name": self.client_profile.full_name if self.client_profile else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class ClientProfile(db.Model):
    __tablename__ = "client_profiles"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)

    full_name = db.Column(db.String(200))
    phone = db.Column(db.String(50))
    email = db.Column(db.String(255))
    age = db.Column(db.Integer)
    gender = db.Column(db.String(50))
    height = db.Column(db.Float)
    height_unit = db.Column(db.Enum("inches", "centimeters", name="height_unit_enum"))
    current_weight = db.Column(db.Float)
    weight_unit = db.Column(db.Enum("pounds", "kilograms", name="weight_unit_enum"))

    emergency_contact = db.Column(db.String(200))
    emergency_phone = db.Column(db.String(50))
    emergency_relationship = db.Column(db.String(100))

    has_medical_conditions = db.Column(db.Boolean)
    medical_conditions = db.Column(db.Text)
    is_taking_medications = db.Column(db.Boolean)
    medications = db.Column(db.Text)
    has_injuries = db.Column(db.Boolean)
    injuries_description = db.Column(db.Text)
    has_allergies = db.Column(db.Boolean)
    allergies = db.Column(db.Text)

    fitness_level = db.Column(db.String(50))
    has_worked_out_before = db.Column(db.Boolean)
    previous_exercise_types = db.Column(db.Text)
    has_home_equipment = db.Column(db.Boolean)
    home_equipment_types = db.Column(db.Text)

    primary_goal = db.Column(db.String(200))
    secondary_goals = db.Column(db.Text)
    target_timeline = db.Column(db.String(100))

    typical_activity_level = db.Column(db.String(100))
    average_sleep_hours = db.Column(db.Float)
    dietary_restrictions = db.Column(db.Text)
    exercise_days_per_week = db.Column(db.Integer)
    preferred_workout_days = db.Column(db.String(200))
    sessions_per_month = db.Column(db.Integer)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    user = db.relationship("User", back_populates="client_profile")

    # Fields editable through PUT /api/profile, with their expected python types
    EDITABLE_FIELDS = {
        "full_name": str,
        "phone": str,
        "email": str,
        "age": int,
        "gender": str,
        "height": float,
        "height_unit": str,
        "current_weight": float,
        "weight_unit": str,
        "emergency_contact": str,
        "emergency_phone": str,
        "emergency_relationship": str,
        "has_medical_conditions": bool,
        "medical_conditions": str,
        "is_taking_medications": bool,
        "medications": str,
        "has_injuries": bool,
        "injuries_description": str,
        "has_allergies": bool,
        "allergies": str,
        "fitness_level": str,
        "has_worked_out_before": bool,
        "previous_exercise_types": str,
        "has_home_equipment": bool,
        "home_equipment_types": str,
        "primary_goal": str,
        "secondary_goals": str,
        "target_timeline": str,
        "typical_activity_level": str,
        "average_sleep_hours": float,
        "dietary_restrictions": str,
        "exercise_days_per_week": int,
        "preferred_workout_days": str,
        "sessions_per_month": int,
    }

    # Fields counted towards profile completion
    COMPLETION_FIELDS = (
        "full_name",
        "phone",
        "email",
        "age",
        "gender",
        "height",
        "current_weight",
        "emergency_contact",
        "emergency_phone",
        "emergency_relationship",
        "has_medical_conditions",
        "is_taking_medications",
        "has_injuries",
        "has_allergies",
        "fitness_level",
        "has_worked_out_before",
        "has_home_equipment",
        "primary_goal",
        "target_timeline",
        "typical_activity_level",
        "average_sleep_hours",
        "exercise_days_per_week",
        "preferred_workout_days",
        "sessions_per_month",
    )

    def completion(self) -> int:
        """Percentage (0-100) of completion fields that are filled in."""
        filled = 0
        for name in self.COMPLETION_FIELDS:
            value = getattr(self, name)
            if value is not None and value != "":
                filled += 1
        return round(filled / len(self.COMPLETION_FIELDS) * 100)

    def to_dict(self):
        data = {name: getattr(self, name) for name in self.EDITABLE_FIELDS}
        data["id"] = self.id
        data["user_id"] = self.user_id
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data
