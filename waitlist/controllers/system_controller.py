# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: system endpoints (health, readiness, metrics).
Pure HTTP layer, no business logic.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from waitlist.core.config import settings
from waitlist.core.dependencies import get_interest_repo
from waitlist.core.logging import get_logger
from waitlist.repositories.interest_repository import InterestRepository

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check():
    """Shallow health check: confirms the process is alive."""
    return {"status": "ok", "service": settings.SERVICE_NAME}


@router.get("/health/ready")
def readiness_check(repo: InterestRepository = Depends(get_interest_repo)):
    """Deep health check: confirms DB connectivity."""
    try:
        repo.verify_connection()
        return {"status": "ok", "database": "connected"}
    except Exception:
        logger.warning("Readiness check failed", exc_info=True)
        return JSONResponse(
            status_code=503,
            content={"error": "Database unavailable", "details": "Please try again later"},
        )


@router.get("/metrics")
def prometheus_metrics():
    """Expose Prometheus metrics in OpenMetrics format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
