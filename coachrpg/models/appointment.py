# coachrpg/models/appointment.py
from datetime import datetime
from .. import db

SESSION_TYPES = ("ONE_ON_ONE", "GROUP", "ASSESSMENT", "CHECK_IN")
FOCUS_TYPES = ("STRENGTH", "CARDIO", "BALANCED")
WORKOUT_TYPES = ("COACHED", "SELF_LOGGED")
APPOINTMENT_STATUSES = (
    "PENDING_APPROVAL",
    "CONFIRMED",
    "COMPLETED",
    "CANCELLED",
    "REJECTED",
    "NO_SHOW",
)

# sessions still expected to happen
ACTIVE_STATUSES = ("CONFIRMED", "PENDING_APPROVAL")


class Appointment(db.Model):
    __tablename__ = "appointments"

    id = db.Column(db.Integer, primary_key=True)
    client_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    admin_id = db.Column(db.Integer, db.ForeignKey("users.id"))

    date_time = db.Column(db.DateTime, nullable=False, index=True)
    duration = db.Column(db.Integer, nullable=False, default=60)  # minutes
    session_type = db.Column(
        db.Enum(*SESSION_TYPES, name="session_type_enum"),
        nullable=False,
        default="ONE_ON_ONE",
    )
    focus_type = db.Column(db.Enum(*FOCUS_TYPES, name="focus_type_enum"))
    workout_type = db.Column(
        db.Enum(*WORKOUT_TYPES, name="workout_type_enum"),
        nullable=False,
        default="COACHED",
    )
    status = db.Column(
        db.Enum(*APPOINTMENT_STATUSES, name="appointment_status_enum"),
        nullable=False,
        default="PENDING_APPROVAL",
    )
    booked_by = db.Column(
        db.Enum("ADMIN", "CLIENT", name="booked_by_enum"),
        nullable=False,
        default="ADMIN",
    )

    location = db.Column(db.String(255))
    notes = db.Column(db.Text)
    client_notes = db.Column(db.Text)
    cancelled_at = db.Column(db.DateTime)
    cancel_reason = db.Column(db.String(255))

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    client = db.relationship("User", foreign_keys=[client_id], backref="appointments")
    admin = db.relationship("User", foreign_keys=[admin_id], backref="coached_appointments")

    def to_dict(self):
        client_profile = self.client.client_profile if self.client else None
        return {
            "id": self.id,
            "client_id": self.client_id,
            "admin_id": self.admin_id,
            "date_time": self.date_time.isoformat() if self.date_time else None,
            "duration": self.duration,
            "session_type": self.session_type,
            "focus_type": self.focus_type,
            "workout_type": self.workout_type,
            "status": self.status,
            "booked_by": self.booked_by,
            "location": self.location,
            "notes": self.notes,
            "client_notes": self.client_notes,
            "cancelled_at": self.cancelled_at.isoformat() if self.cancelled_at else None,
            "cancel_reason": self.cancel_reason,
            "client": {
                "id": self.client.id,
                "email": self.client.email,
                "full_name": client_profile.full_name if client_profile else None,
                "phone": client_profile.phone if client_profile else None,
            }
            if self.client
            else None,
        }
