"""
Health Check Endpoints

Provides health and readiness checks for orchestration systems. Checks that
load the snapshot are plain functions and run in the threadpool.
"""

from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel

from retail_insights.analytics.exceptions import InvalidInput
from retail_insights.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
    environment: str
    timestamp: datetime
    checks: Dict[str, Any]


def _check_snapshot(request: Request) -> Dict[str, Any]:
    try:
        snapshot = request.app.state.snapshot_loader()
    except (FileNotFoundError, InvalidInput) as e:
        return {"status": "unhealthy", "error": str(e)}
    return {"status": "healthy", "rows": len(snapshot)}


@router.get("/health", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint.

    Checks:
    - Application status
    - Fact table snapshot availability
    """
    settings = get_settings()
    snapshot_health = _check_snapshot(request)

    return HealthResponse(
        status="healthy" if snapshot_health["status"] == "healthy" else "degraded",
        version=settings.version,
        environment=settings.app_env,
        timestamp=datetime.utcnow(),
        checks={"snapshot": snapshot_health},
    )


@router.get("/health/live")
async def liveness_check() -> Dict[str, str]:
    """
    Kubernetes liveness probe endpoint.

    Returns 200 if the application is running.
    """
    return {"status": "alive"}


@router.get("/health/ready")
def readiness_check(request: Request, response: Response) -> Dict[str, Any]:
    """
    Kubernetes readiness probe endpoint.

    Returns 200 once the fact table snapshot can be served.
    """
    snapshot_health = _check_snapshot(request)
    if snapshot_health["status"] != "healthy":
        response.status_code = 503
        return {"status": "not_ready", "reason": snapshot_health["error"]}
    return {"status": "ready", "rows": snapshot_health["rows"]}
