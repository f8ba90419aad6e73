"""Style profile API router."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from forge_ai.api.deps import get_current_user_id
from forge_ai.domain.coaching.models import StyleContext
from forge_ai.infrastructure.database.connection import get_db
from forge_ai.services.style_service import StyleService

router = APIRouter(prefix="/style", tags=["style"])


def get_style_service(db: AsyncSession = Depends(get_db)) -> StyleService:
    """Style service dependency."""
    return StyleService(db)


@router.get(
    "/projects/{project_id}",
    response_model=StyleContext,
    summary="Get style profile",
    description="Returns the project's style profile, creating the default on first access.",
)
async def get_style_profile(
    project_id: str,
    user_id: str = Depends(get_current_user_id),
    service: StyleService = Depends(get_style_service),
) -> StyleContext:
    """Style profile lookup API."""
    return await service.get_profile(user_id, project_id)


@router.put(
    "/projects/{project_id}",
    response_model=StyleContext,
    summary="Save style profile",
    description=(
        "Creates or replaces the style profile. "
        "Omitting custom_rules keeps the stored rules."
    ),
)
async def upsert_style_profile(
    project_id: str,
    request: StyleContext,
    user_id: str = Depends(get_current_user_id),
    service: StyleService = Depends(get_style_service),
) -> StyleContext:
    """Style profile create-or-replace API."""
    return await service.upsert_profile(user_id, project_id, request)
