"""
Health check endpoint.
"""

from fastapi import APIRouter

from graphkit import __version__
from graphkit.api.models import HealthResponse
from graphkit.config.settings import get_settings

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Report service status, version and environment.",
)
async def health_check() -> HealthResponse:
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
    )
