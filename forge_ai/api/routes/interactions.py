"""Interaction lifecycle API router."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from forge_ai.api.deps import get_current_user_id
from forge_ai.domain.coaching.models import Interaction
from forge_ai.infrastructure.database.connection import get_db
from forge_ai.services.interaction_service import InteractionService

router = APIRouter(prefix="/interactions", tags=["interactions"])


def get_interaction_service(db: AsyncSession = Depends(get_db)) -> InteractionService:
    """Interaction service dependency."""
    return InteractionService(db)


@router.post("/{interaction_id}/acknowledge", response_model=Interaction, summary="Acknowledge")
async def acknowledge_interaction(
    interaction_id: str,
    user_id: str = Depends(get_current_user_id),
    service: InteractionService = Depends(get_interaction_service),
) -> Interaction:
    """Marks coaching feedback as acknowledged."""
    return await service.acknowledge(user_id, interaction_id)


@router.post("/{interaction_id}/dismiss", response_model=Interaction, summary="Dismiss")
async def dismiss_interaction(
    interaction_id: str,
    user_id: str = Depends(get_current_user_id),
    service: InteractionService = Depends(get_interaction_service),
) -> Interaction:
    """Marks coaching feedback as dismissed."""
    return await service.dismiss(user_id, interaction_id)


@router.post("/{interaction_id}/flag", response_model=Interaction, summary="Flag")
async def flag_interaction(
    interaction_id: str,
    user_id: str = Depends(get_current_user_id),
    service: InteractionService = Depends(get_interaction_service),
) -> Interaction:
    """Flags coaching feedback for review."""
    return await service.flag(user_id, interaction_id)
