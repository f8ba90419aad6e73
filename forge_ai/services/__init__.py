"""Service layer.

Provides the coaching workflow, interaction lifecycle, usage reporting and
style profile services.
"""

from forge_ai.services.coaching_service import CoachingService
from forge_ai.services.errors import (
    CoachingServiceError,
    CoachingValidationError,
    NotFoundError,
    QuotaExceededError,
    ServiceUnavailableError,
    UnauthorizedError,
)
from forge_ai.services.interaction_service import InteractionService
from forge_ai.services.style_service import StyleService
from forge_ai.services.usage_service import UsageService

__all__ = [
    "CoachingService",
    "CoachingServiceError",
    "CoachingValidationError",
    "InteractionService",
    "NotFoundError",
    "QuotaExceededError",
    "ServiceUnavailableError",
    "StyleService",
    "UnauthorizedError",
    "UsageService",
]
