"""Coaching quota policy.

Only the daily ceiling gates access. Monthly counts are computed for
usage reporting and intentionally do not deny requests.
"""

from dataclasses import dataclass
from datetime import date, datetime, time

from forge_ai.domain.coaching.models import SubscriptionTier

# None means unlimited.
DAILY_COACHING_LIMITS: dict[SubscriptionTier, int | None] = {
    SubscriptionTier.FREE: 50,
    SubscriptionTier.PRO: None,
    SubscriptionTier.STUDIO: None,
}


@dataclass(frozen=True)
class QuotaDecision:
    """Result of a quota check."""

    allowed: bool
    daily_limit: int | None = None
    reason: str | None = None


def daily_limit_for(tier: SubscriptionTier) -> int | None:
    """Returns the daily ceiling for a tier, None when unlimited."""
    return DAILY_COACHING_LIMITS[SubscriptionTier(tier)]


def check_quota(tier: SubscriptionTier, daily_count: int) -> QuotaDecision:
    """Decides whether another coaching request is allowed today.

    Args:
        tier: Subscription tier of the requesting user
        daily_count: Interactions the user already logged today

    Returns:
        Allow or deny decision with the applicable ceiling
    """
    limit = daily_limit_for(tier)
    if limit is not None and daily_count >= limit:
        return QuotaDecision(
            allowed=False,
            daily_limit=limit,
            reason=f"Daily coaching limit reached for {SubscriptionTier(tier).value} tier",
        )
    return QuotaDecision(allowed=True, daily_limit=limit)


def _local_midnight(day: date) -> datetime:
    # Offset is resolved for the midnight itself, not copied from "now".
    return datetime.combine(day, time.min).astimezone()


def start_of_day(now: datetime | None = None) -> datetime:
    """Local midnight of the given (or current) day, timezone-aware."""
    current = (now or datetime.now()).astimezone()
    return _local_midnight(current.date())


def start_of_month(now: datetime | None = None) -> datetime:
    """Local midnight on the first of the given (or current) month."""
    current = (now or datetime.now()).astimezone()
    return _local_midnight(current.date().replace(day=1))
