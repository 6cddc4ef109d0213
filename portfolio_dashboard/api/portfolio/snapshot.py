"""
Read-only portfolio snapshot endpoints.

Provides:
- GET /: Full snapshot (stocks, sectors, totals)
- GET /stocks: Stock table with sector filter and sorting
- GET /sectors: Sector breakdown, largest investment first
- GET /sectors/{name}: One sector by exact label
- GET /performers: Best and worst stocks and sectors
"""

from typing import Literal

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from ...models.portfolio import EnrichedStock, PortfolioSnapshot, Sector
from ...services.refresh_scheduler import RefreshScheduler
from ..dependencies.portfolio_deps import get_refresh_scheduler
from ..schemas.portfolio_models import PerformersResponse, StockSortField

logger = structlog.get_logger()

router = APIRouter()


@router.get("", response_model=PortfolioSnapshot)
async def get_portfolio(
    scheduler: RefreshScheduler = Depends(get_refresh_scheduler),
) -> PortfolioSnapshot:
    """
    Get the latest published portfolio snapshot.

    Returns 503 (not_initialized) until the first refresh has completed.
    """
    return scheduler.get_snapshot()


@router.get("/stocks", response_model=list[EnrichedStock])
async def get_stocks(
    sector: str | None = Query(None, description="Exact sector label to filter by"),
    sort_by: StockSortField | None = Query(None, description="Field to sort by"),
    order: Literal["asc", "desc"] = Query("desc", description="Sort direction"),
    scheduler: RefreshScheduler = Depends(get_refresh_scheduler),
) -> list[EnrichedStock]:
    """
    Get enriched stocks for the holdings table.

    Args:
        sector: Only stocks in this sector (case-sensitive)
        sort_by: Column to sort by; source order when omitted
        order: asc or desc

    Returns:
        Stocks from the latest snapshot
    """
    snapshot = scheduler.get_snapshot()
    stocks = list(snapshot.stocks)

    if sector is not None:
        stocks = [s for s in stocks if s.sector == sector]

    if sort_by is not None:
        stocks.sort(key=lambda s: getattr(s, sort_by), reverse=order == "desc")

    return stocks


@router.get("/sectors", response_model=list[Sector])
async def get_sectors(
    scheduler: RefreshScheduler = Depends(get_refresh_scheduler),
) -> list[Sector]:
    """Get sector roll-ups ordered by total investment, largest first."""
    return list(scheduler.get_snapshot().sectors)


@router.get("/sectors/{name}", response_model=Sector)
async def get_sector(
    name: str,
    scheduler: RefreshScheduler = Depends(get_refresh_scheduler),
) -> Sector:
    """Get one sector by its exact label."""
    sector = scheduler.get_snapshot().get_sector(name)
    if sector is None:
        raise HTTPException(status_code=404, detail=f"Sector not found: {name}")
    return sector


@router.get("/performers", response_model=PerformersResponse)
async def get_performers(
    limit: int = Query(3, ge=1, le=50, description="Entries per list"),
    scheduler: RefreshScheduler = Depends(get_refresh_scheduler),
) -> PerformersResponse:
    """Get top and worst performing stocks and sectors."""
    snapshot = scheduler.get_snapshot()
    return PerformersResponse(
        top_performers=snapshot.top_performers(limit),
        worst_performers=snapshot.worst_performers(limit),
        best_sectors=snapshot.best_sectors(limit),
        worst_sectors=snapshot.worst_sectors(limit),
    )
