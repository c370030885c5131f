"""
ClinScore Health Routes
=======================

Health check endpoint for monitoring and orchestration.

Endpoints:
    GET /health   - Service status and loaded score count

Author: ClinScore Team
Version: 1.0.0
"""

from fastapi import APIRouter

from clinscore.api.dependencies import ServiceContainer
from clinscore.config import settings
from shared.contracts.scores import HealthResponse


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns service status and the number of loaded score definitions.",
)
async def health_check() -> HealthResponse:
    container = ServiceContainer.get_instance()
    library = container.library
    return HealthResponse(
        status="healthy" if container.available else "degraded",
        version=settings.app_version,
        scores_loaded=library.count() if library else 0,
        scores_dir=str(library.source_path) if library and library.source_path else settings.scores_dir,
    )
