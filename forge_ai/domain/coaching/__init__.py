"""Coaching domain.

Models and policies for prose coaching requests and logged interactions.
"""

from forge_ai.domain.coaching.models import (
    CoachingRequest,
    CustomRule,
    FeedbackIntensity,
    FocusArea,
    Formality,
    Interaction,
    InteractionFlag,
    NewInteraction,
    PointOfView,
    RequestType,
    StyleContext,
    SubscriptionTier,
    TemperatureCheckReport,
    Tense,
    UsageSummary,
)
from forge_ai.domain.coaching.quota import QuotaDecision, check_quota, daily_limit_for

__all__ = [
    "CoachingRequest",
    "CustomRule",
    "FeedbackIntensity",
    "FocusArea",
    "Formality",
    "Interaction",
    "InteractionFlag",
    "NewInteraction",
    "PointOfView",
    "QuotaDecision",
    "RequestType",
    "StyleContext",
    "SubscriptionTier",
    "TemperatureCheckReport",
    "Tense",
    "UsageSummary",
    "check_quota",
    "daily_limit_for",
]
