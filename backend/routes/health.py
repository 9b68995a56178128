"""
Health check route for the product review backend.

This endpoint is PUBLIC and only reports that the process is serving
requests. It does not call Gemini, SerpAPI or Supabase, so an outage of
those providers never marks the instance unhealthy.
"""

from fastapi import APIRouter

from backend.config import settings
from backend.schemas.health import HealthResponse
from backend.utils.logging import get_logger

logger = get_logger(__name__)

# Mounted at root level in main.py
router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    status_code=200,
)
async def health_check() -> HealthResponse:
    """
    Example response:
        {
            "status": "ok",
            "service": "product-review-backend",
            "environment": "production"
        }
    """
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok", environment=settings.ENVIRONMENT)
