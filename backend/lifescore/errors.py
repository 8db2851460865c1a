"""Exceptions raised by the Life Score engine and its store."""


class LifeScoreError(Exception):
    """Base class for engine errors."""


class CheckInValidationError(LifeScoreError):
    """A check-in has a missing or out-of-range rating, or a bad date."""

    def __init__(self, message: str, errors: list = None):
        super().__init__(message)
        self.errors = errors or []


class PersistenceError(LifeScoreError):
    """Saving the player blob failed; nothing was committed."""


class CorruptStateError(LifeScoreError):
    """A stored player blob could not be parsed."""
