"""Coaching API router."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from forge_ai.api.deps import get_current_user_id
from forge_ai.core.models.api import (
    AnalyzePassageRequestDTO,
    CoachingResponseDTO,
    CraftQARequestDTO,
    InteractionListResponseDTO,
)
from forge_ai.domain.coaching.models import TemperatureCheckReport
from forge_ai.infrastructure.database.connection import get_db
from forge_ai.services.coaching_service import CoachingService

router = APIRouter(prefix="/coaching", tags=["coaching"])


def get_coaching_service(db: AsyncSession = Depends(get_db)) -> CoachingService:
    """Coaching service dependency."""
    return CoachingService(db)


@router.post(
    "/analyze-passage",
    response_model=CoachingResponseDTO,
    summary="Analyze a passage",
    description="Returns craft observations on a selected passage. The coach never rewrites prose.",
)
async def analyze_passage(
    request: AnalyzePassageRequestDTO,
    user_id: str = Depends(get_current_user_id),
    service: CoachingService = Depends(get_coaching_service),
) -> CoachingResponseDTO:
    """Passage analysis API.

    Errors map to 404 (document missing or not owned), 429 (daily limit),
    422 (passage length) and 503 (model unavailable).
    """
    interaction = await service.analyze_passage(
        user_id=user_id,
        document_id=request.document_id,
        passage=request.selected_text,
        intensity=request.intensity,
        focus_areas=request.focus_areas,
    )
    return CoachingResponseDTO.from_interaction(interaction)


@router.post(
    "/craft-qa",
    response_model=CoachingResponseDTO,
    summary="Ask a craft question",
    description=(
        "Answers a free-form craft question about a project. "
        "Craft questions count toward the same daily coaching limit as passage "
        "analysis (50 per day on the FREE tier)."
    ),
)
async def craft_qa(
    request: CraftQARequestDTO,
    user_id: str = Depends(get_current_user_id),
    service: CoachingService = Depends(get_coaching_service),
) -> CoachingResponseDTO:
    """Craft Q&A API.

    Errors map to 404 (project missing or not owned), 429 (daily limit shared
    with passage analysis), 422 (question too short) and 503.
    """
    interaction = await service.craft_qa(
        user_id=user_id,
        project_id=request.project_id,
        question=request.question,
        context=request.context,
    )
    return CoachingResponseDTO.from_interaction(interaction)


@router.get(
    "/chapters/{chapter_id}/temperature",
    response_model=TemperatureCheckReport,
    summary="Chapter temperature check",
    description="Sums stored scene word counts for a chapter.",
)
async def temperature_check(
    chapter_id: str,
    user_id: str = Depends(get_current_user_id),
    service: CoachingService = Depends(get_coaching_service),
) -> TemperatureCheckReport:
    """Chapter temperature check API."""
    return await service.temperature_check(user_id=user_id, chapter_id=chapter_id)


@router.get(
    "/projects/{project_id}/interactions",
    response_model=InteractionListResponseDTO,
    summary="Interaction history",
    description="Lists the latest coaching interactions for a project.",
)
async def list_interactions(
    project_id: str,
    user_id: str = Depends(get_current_user_id),
    service: CoachingService = Depends(get_coaching_service),
) -> InteractionListResponseDTO:
    """Interaction history API."""
    interactions = await service.list_interactions(user_id=user_id, project_id=project_id)
    return InteractionListResponseDTO(interactions=interactions)
