from datetime import datetime, timezone

from fastapi import APIRouter

from weather_api.config import settings
from weather_api.logger import logger
from weather_api.schemas.weather import HealthStatus


router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthStatus, name="HealthCheck")
def health_check():
    """API health check endpoint."""
    logger.info(f"Health check requested at {datetime.now(timezone.utc).isoformat()}")
    return HealthStatus(status="Healthy", timestamp=datetime.now(timezone.utc), version=settings.VERSION)
