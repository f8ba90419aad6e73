"""Coaching service errors.

Every error is terminal for the current request; none is retried here.
"""


class CoachingServiceError(Exception):
    """Base coaching service error."""

    pass


class NotFoundError(CoachingServiceError):
    """Resource or its ownership chain is missing."""

    pass


class UnauthorizedError(NotFoundError):
    """Resource exists but belongs to another user.

    Subclasses NotFoundError so callers outside the service see the same
    error class and message whether or not the record exists.
    """

    pass


class QuotaExceededError(CoachingServiceError):
    """Subscription tier's daily coaching ceiling reached."""

    def __init__(self, message: str, daily_limit: int | None = None) -> None:
        super().__init__(message)
        self.daily_limit = daily_limit


class CoachingValidationError(CoachingServiceError):
    """Passage, question or enumerated literal outside accepted bounds."""

    pass


class ServiceUnavailableError(CoachingServiceError):
    """Coaching model call failed."""

    pass
