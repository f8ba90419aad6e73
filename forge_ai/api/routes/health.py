"""Health check API router."""

from fastapi import APIRouter

from forge_ai.core.config.settings import settings
from forge_ai.core.models.api import HealthCheckResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "",
    response_model=HealthCheckResponse,
    summary="Health check",
    description="Reports service status.",
)
async def health_check() -> HealthCheckResponse:
    """Health check endpoint used by liveness and readiness probes.

    Returns:
        Service status, version and name
    """
    return HealthCheckResponse(
        status="healthy",
        version=settings.app_version,
        service=settings.app_name,
    )
