from tartil_app.core.error_handlers import TartilError, NotFoundError, ValidationError


class HifzError(TartilError):
    """Base exception for Hifz module."""

    def __init__(self, message: str, code: str = 'HIFZ_ERROR', status_code: int = 500, details=None):
        super().__init__(message=message, code=code, status_code=status_code, details=details)


class InvalidVerseError(ValidationError):
    """Raised for out-of-range chapter/verse numbers, malformed verse keys or ranges."""
    pass


class InvalidRatingError(ValidationError):
    """Raised when the provided quality rating is not an integer in 0-5."""
    pass


class VerseNotQueuedError(NotFoundError):
    """Raised when reviewing a verse the learner never added."""

    def __init__(self, learner_id: str, verse_key: str):
        super().__init__(
            message=f"Verse {verse_key} not found in hifz queue of learner {learner_id}",
            resource='memorization_item'
        )
        self.learner_id = learner_id
        self.verse_key = verse_key


class RewardDeliveryError(HifzError):
    """Raised by a reward bridge when a collaborator call fails. Logged, never surfaced."""

    def __init__(self, message: str, instruction: str = None):
        super().__init__(
            message=message,
            code='REWARD_DELIVERY_FAILED',
            status_code=502,
            details={'instruction': instruction} if instruction else None
        )
