"""
Portfolio API request/response models.

Separates API layer from domain models for clean architecture.
"""

from typing import Literal

from pydantic import BaseModel, Field

from ...models.portfolio import EnrichedStock, Sector

StockSortField = Literal[
    "name",
    "investment",
    "present_value",
    "gain_loss",
    "gain_loss_percentage",
    "portfolio_percentage",
]


class SchedulerStartRequest(BaseModel):
    """Request model for starting auto-refresh."""

    interval_ms: int | None = Field(
        None,
        description="Refresh interval in milliseconds (server default if omitted)",
        gt=0,
    )

    class Config:
        """Pydantic config."""

        json_schema_extra = {"example": {"interval_ms": 15000}}


class SchedulerStatusResponse(BaseModel):
    """Response model for the refresh scheduler's state."""

    state: Literal["idle", "scheduled"]
    interval_ms: int | None = None
    ready: bool
    in_flight: bool
    refresh_count: int
    failure_count: int
    last_success_at: str | None = None
    last_failure_at: str | None = None
    last_error: str | None = None


class PerformersResponse(BaseModel):
    """Best and worst stocks and sectors by gain/loss percentage."""

    top_performers: list[EnrichedStock]
    worst_performers: list[EnrichedStock]
    best_sectors: list[Sector]
    worst_sectors: list[Sector]
