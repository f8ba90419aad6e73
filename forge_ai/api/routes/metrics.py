"""Prose metrics API router."""

from fastapi import APIRouter, Depends

from forge_ai.api.deps import get_current_user_id
from forge_ai.core.models.api import TextMetricsRequestDTO
from forge_ai.domain.metrics import TemperatureMetrics, analyze

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.post(
    "/temperature",
    response_model=TemperatureMetrics,
    summary="Text temperature metrics",
    description="Computes prose metrics for raw text. Passive voice and dialogue values are estimates.",
)
async def text_temperature(
    request: TextMetricsRequestDTO,
    user_id: str = Depends(get_current_user_id),
) -> TemperatureMetrics:
    """Runs the metrics analyzer over caller-supplied text."""
    return analyze(request.text)
