"""API request/response schemas."""

from .portfolio_models import (
    PerformersResponse,
    SchedulerStartRequest,
    SchedulerStatusResponse,
    StockSortField,
)

__all__ = [
    "PerformersResponse",
    "SchedulerStartRequest",
    "SchedulerStatusResponse",
    "StockSortField",
]
