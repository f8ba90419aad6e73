"""Coaching usage reporting service."""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from forge_ai.domain.coaching.models import SubscriptionTier, UsageSummary
from forge_ai.domain.coaching.quota import daily_limit_for, start_of_day, start_of_month
from forge_ai.infrastructure.database.repository import CoachingRepository


class UsageService:
    """Reports a user's coaching usage against their tier.

    Counts are recomputed from the interaction log on every call.
    """

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialises the service.

        Args:
            db_session: Async database session
        """
        self.repository = CoachingRepository(db_session)

    async def get_tier(self, user_id: str) -> SubscriptionTier:
        """Returns the user's tier, FREE when no subscription exists."""
        return await self.repository.get_subscription_tier(user_id) or SubscriptionTier.FREE

    async def get_usage(self, user_id: str, now: datetime | None = None) -> UsageSummary:
        """Builds the usage summary.

        Args:
            user_id: User id
            now: Reference time, current local time when None

        Returns:
            Tier, daily and monthly counts and the daily limit
        """
        tier = await self.get_tier(user_id)
        daily = await self.repository.count_interactions_since(user_id, start_of_day(now))
        monthly = await self.repository.count_interactions_since(user_id, start_of_month(now))

        return UsageSummary(
            tier=tier,
            daily_coaching_requests=daily,
            monthly_coaching_requests=monthly,
            daily_limit=daily_limit_for(tier),
        )
