# coachrpg/models/character.py
from datetime import datetime
from .. import db
from ..errors import CharacterNotFound


class RPGCharacter(db.Model):
    """
    Per-user gamification record.

    `level` is denormalized for queries; it is always written together with
    `xp` and must equal levels.level_for_xp(xp).
    """
    __tablename__ = "rpg_characters"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)

    level = db.Column(db.Integer, nullable=False, default=1)
    xp = db.Column(db.Integer, nullable=False, default=0)

    strength = db.Column(db.Integer, nullable=False, default=0)
    endurance = db.Column(db.Integer, nullable=False, default=0)
    discipline = db.Column(db.Integer, nullable=False, default=0)

    current_streak = db.Column(db.Integer, nullable=False, default=0)
    longest_streak = db.Column(db.Integer, nullable=False, default=0)
    last_workout_date = db.Column(db.DateTime)

    avatar_config = db.Column(db.JSON)
    public_profile = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    user = db.relationship("User", backref=db.backref("rpg_character", uselist=False))

    @staticmethod
    def get_for_update(user_id):
        """Fetch the character with a row lock; raises CharacterNotFound."""
        character = (
            RPGCharacter.query.filter_by(user_id=user_id).with_for_update().first()
        )
        if character is None:
            raise CharacterNotFound(user_id)
        return character

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "level": self.level,
            "xp": self.xp,
            "strength": self.strength,
            "endurance": self.endurance,
            "discipline": self.discipline,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "last_workout_date": self.last_workout_date.isoformat()
            if self.last_workout_date
            else None,
            "avatar_config": self.avatar_config,
            "public_profile": self.public_profile,
        }


class XPLogEntry(db.Model):
    __tablename__ = "rpg_xp_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    amount = db.Column(db.Integer, nullable=False)
    source = db.Column(db.String(100), nullable=False)
    reference_id = db.Column(db.String(100))
    note = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "amount": self.amount,
            "source": self.source,
            "reference_id": self.reference_id,
            "note": self.note,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
