"""
GET /health - public liveness probe.

Does not touch Supabase or Gemini, so it answers even when those are down
or unconfigured.
"""

import logging

from fastapi import APIRouter

from gamehub import __version__
from gamehub.config import settings
from gamehub.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    status_code=200,
)
async def health_check() -> HealthResponse:
    logger.debug("Health check")
    return HealthResponse(version=__version__, environment=settings.ENVIRONMENT)
