"""
Refresh and auto-refresh control endpoints.

Provides:
- POST /refresh: Run the pipeline now (joins a run already in flight)
- GET /scheduler: Auto-refresh state and refresh bookkeeping
- POST /scheduler/start: Start or replace the auto-refresh timer
- POST /scheduler/stop: Stop auto-refresh (idempotent)
"""

import structlog
from fastapi import APIRouter, Body, Depends, Request

from ...models.portfolio import PortfolioSnapshot
from ...services.refresh_scheduler import RefreshScheduler
from ..dependencies.portfolio_deps import get_refresh_scheduler
from ..dependencies.rate_limit import rate_limit_expensive, rate_limit_write
from ..schemas.portfolio_models import SchedulerStartRequest, SchedulerStatusResponse

logger = structlog.get_logger()

router = APIRouter()


@router.post("/refresh", response_model=PortfolioSnapshot)
@rate_limit_expensive
async def refresh_portfolio(
    request: Request,
    scheduler: RefreshScheduler = Depends(get_refresh_scheduler),
) -> PortfolioSnapshot:
    """
    Refresh holdings and quotes now.

    Returns the newly published snapshot. If the holdings source is
    unavailable, responds 503 and the previous snapshot stays published.
    """
    logger.info("Manual refresh requested")
    return await scheduler.refresh_now()


@router.get("/scheduler", response_model=SchedulerStatusResponse)
async def get_scheduler_status(
    scheduler: RefreshScheduler = Depends(get_refresh_scheduler),
) -> SchedulerStatusResponse:
    """Get auto-refresh state."""
    return SchedulerStatusResponse(**scheduler.status())


@router.post("/scheduler/start", response_model=SchedulerStatusResponse)
@rate_limit_write
async def start_scheduler(
    request: Request,
    body: SchedulerStartRequest | None = Body(None),
    scheduler: RefreshScheduler = Depends(get_refresh_scheduler),
) -> SchedulerStatusResponse:
    """
    Start auto-refresh, replacing any running timer.

    Omitting the body (or interval_ms) uses the configured default interval.
    """
    scheduler.start(body.interval_ms if body else None)
    return SchedulerStatusResponse(**scheduler.status())


@router.post("/scheduler/stop", response_model=SchedulerStatusResponse)
@rate_limit_write
async def stop_scheduler(
    request: Request,
    scheduler: RefreshScheduler = Depends(get_refresh_scheduler),
) -> SchedulerStatusResponse:
    """Stop auto-refresh. Stopping an idle scheduler is a no-op."""
    scheduler.stop()
    return SchedulerStatusResponse(**scheduler.status())
