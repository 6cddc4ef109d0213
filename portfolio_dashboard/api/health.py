"""
Health check endpoint for monitoring.
"""

from typing import Any

import structlog
from fastapi import APIRouter, Depends

from ..core.config import Settings, get_settings
from ..core.utils.date_utils import utcnow
from ..services.refresh_scheduler import RefreshScheduler
from .dependencies.portfolio_deps import get_refresh_scheduler

logger = structlog.get_logger()

router = APIRouter()

VERSION = "0.1.0"


@router.get("/health")
async def health_check(
    scheduler: RefreshScheduler = Depends(get_refresh_scheduler),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    """
    Report service health.

    Status is "ok" once a snapshot has been published and the last refresh
    succeeded, "degraded" otherwise. The endpoint itself always answers 200.
    """
    status = scheduler.status()
    healthy = status["ready"] and status["last_error"] is None

    if not healthy:
        logger.warning(
            "Health check degraded",
            ready=status["ready"],
            last_error=status["last_error"],
        )

    return {
        "status": "ok" if healthy else "degraded",
        "environment": settings.environment,
        "version": VERSION,
        "timestamp": utcnow().isoformat(),
        "portfolio": {
            "ready": status["ready"],
            "scheduler_state": status["state"],
            "interval_ms": status["interval_ms"],
            "last_success_at": status["last_success_at"],
            "last_error": status["last_error"],
        },
    }
