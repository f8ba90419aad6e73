"""Coaching usage API router."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from forge_ai.api.deps import get_current_user_id
from forge_ai.domain.coaching.models import UsageSummary
from forge_ai.infrastructure.database.connection import get_db
from forge_ai.services.usage_service import UsageService

router = APIRouter(prefix="/usage", tags=["usage"])


def get_usage_service(db: AsyncSession = Depends(get_db)) -> UsageService:
    """Usage service dependency."""
    return UsageService(db)


@router.get(
    "",
    response_model=UsageSummary,
    summary="Coaching usage",
    description="Daily and monthly coaching counts with the tier's daily limit.",
)
async def get_usage(
    user_id: str = Depends(get_current_user_id),
    service: UsageService = Depends(get_usage_service),
) -> UsageSummary:
    """Usage summary API."""
    return await service.get_usage(user_id)
