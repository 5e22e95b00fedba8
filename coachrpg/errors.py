# coachrpg/errors.py


class CharacterNotFound(LookupError):
    """Raised when an RPG operation targets a user without a character."""

    def __init__(self, user_id=None, message: str = "Character not found"):
        super().__init__(message)
        self.user_id = user_id
        self.message = message

    def __str__(self) -> str:
        return self.message
