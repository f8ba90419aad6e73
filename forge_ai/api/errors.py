"""FastAPI exception handlers for coaching service errors.

Response format:
    {
        "error": "NotFoundError",
        "detail": "Document not found"
    }

UnauthorizedError is reported exactly like NotFoundError so another
user's records cannot be told apart from missing ones.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from forge_ai.services.errors import (
    CoachingServiceError,
    CoachingValidationError,
    NotFoundError,
    QuotaExceededError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)

# Most specific first.
ERROR_STATUS_CODES: list[tuple[type[CoachingServiceError], int]] = [
    (NotFoundError, 404),
    (QuotaExceededError, 429),
    (CoachingValidationError, 422),
    (ServiceUnavailableError, 503),
    (CoachingServiceError, 500),
]


def get_status_code_for_error(error: CoachingServiceError) -> int:
    """Maps a service error to its HTTP status code."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 500


def public_error_name(error: CoachingServiceError) -> str:
    """Error class name exposed to clients."""
    if isinstance(error, NotFoundError):
        return NotFoundError.__name__
    return type(error).__name__


async def coaching_error_handler(request: Request, exc: CoachingServiceError) -> JSONResponse:
    """Converts a CoachingServiceError into a JSON error response."""
    status_code = get_status_code_for_error(exc)

    if status_code >= 500:
        logger.error(
            "Coaching request failed",
            extra={"path": request.url.path, "error": str(exc)},
        )

    return JSONResponse(
        status_code=status_code,
        content={"error": public_error_name(exc), "detail": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Registers the coaching error handlers on the app."""
    app.add_exception_handler(CoachingServiceError, coaching_error_handler)
