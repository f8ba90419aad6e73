"""Interaction lifecycle service.

acknowledged, dismissed and flagged are independent flags. Each operation
raises exactly one of them; none is ever cleared here.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from forge_ai.domain.coaching.models import Interaction, InteractionFlag
from forge_ai.infrastructure.database.repository import CoachingRepository
from forge_ai.services.errors import NotFoundError

logger = logging.getLogger(__name__)


class InteractionService:
    """Post-hoc author feedback on logged interactions."""

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialises the service.

        Args:
            db_session: Async database session
        """
        self.repository = CoachingRepository(db_session)

    async def acknowledge(self, user_id: str, interaction_id: str) -> Interaction:
        """Marks the interaction as acknowledged."""
        return await self._set_flag(user_id, interaction_id, InteractionFlag.ACKNOWLEDGED)

    async def dismiss(self, user_id: str, interaction_id: str) -> Interaction:
        """Marks the interaction as dismissed."""
        return await self._set_flag(user_id, interaction_id, InteractionFlag.DISMISSED)

    async def flag(self, user_id: str, interaction_id: str) -> Interaction:
        """Flags the interaction for review."""
        return await self._set_flag(user_id, interaction_id, InteractionFlag.FLAGGED)

    async def _set_flag(
        self, user_id: str, interaction_id: str, flag: InteractionFlag
    ) -> Interaction:
        """Raises one flag after checking existence and ownership.

        Raises:
            NotFoundError: Interaction missing or owned by another user
        """
        interaction = await self.repository.get_interaction(interaction_id)
        if interaction is None or interaction.user_id != user_id:
            raise NotFoundError("Interaction not found")

        updated = await self.repository.set_interaction_flag(interaction_id, flag)
        if updated is None:
            raise NotFoundError("Interaction not found")

        logger.info(
            "Interaction flag set",
            extra={"interaction_id": interaction_id, "flag": flag.value},
        )
        return updated
