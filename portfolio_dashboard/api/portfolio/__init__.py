"""
Portfolio API module.

Aggregates the portfolio sub-routers into a single router:
- snapshot: Read-only snapshot, stocks, sectors and performers
- refresh: Manual refresh and auto-refresh control
"""

from fastapi import APIRouter

from .refresh import router as refresh_router
from .snapshot import router as snapshot_router

PREFIX = "/api/portfolio"

router = APIRouter(tags=["portfolio"])

router.include_router(snapshot_router, prefix=PREFIX)
router.include_router(refresh_router, prefix=PREFIX)

__all__ = ["router"]
