"""
Health Check Router - Skin Wellness Visualization API
skin_wellness/routers/health.py

Reports service status and checks that the compiled-in configuration is sane.
"""
import logging
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from skin_wellness.chart.geometry import segment_angle_span
from skin_wellness.config import get_settings
from skin_wellness.scoring.category_registry import CATEGORY_REGISTRY
from skin_wellness.scoring.parameter_catalog import CATEGORY_PARAMETERS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]


#  Dependency Health Checks


def check_registry() -> str:
    """Every category has a segment span and a parameter template."""
    try:
        segment_angle_span(len(CATEGORY_REGISTRY))
        missing = [c.id for c in CATEGORY_REGISTRY if c.id not in CATEGORY_PARAMETERS]
        if missing:
            return f"unhealthy: no parameters for {', '.join(missing)}"
        return "healthy"
    except Exception as e:
        logger.error("Registry health check failed: %s", e)
        return f"unhealthy: {e}"


def check_renderer() -> str:
    try:
        import plotly  # noqa: F401
        return "healthy"
    except ImportError as e:
        return f"unhealthy: {e}"


@router.get("/health", response_model=HealthResponse, summary="Service health")
async def health_check():
    settings = get_settings()
    dependencies = {
        "category_registry": check_registry(),
        "plotly_renderer": check_renderer(),
    }
    all_healthy = all(v == "healthy" for v in dependencies.values())
    body = HealthResponse(
        status="healthy" if all_healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        dependencies=dependencies,
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if all_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(mode="json"),
    )
