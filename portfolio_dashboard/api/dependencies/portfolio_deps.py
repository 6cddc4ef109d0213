"""
Dependencies for portfolio API endpoints.
"""

from fastapi import Request

from ...core.config import Settings
from ...core.utils.circuit_breaker import QuoteCircuitBreaker
from ...services.holdings.base import HoldingsSource
from ...services.holdings.spreadsheet_source import SpreadsheetHoldingsSource
from ...services.holdings.static_source import StaticHoldingsSource
from ...services.market_data.base import QuoteSource
from ...services.market_data.simulated import SimulatedQuoteSource
from ...services.portfolio_pipeline import AggregationPipeline
from ...services.refresh_scheduler import RefreshScheduler


def build_holdings_source(settings: Settings) -> HoldingsSource:
    """Spreadsheet source when a file is configured, sample portfolio otherwise."""
    if settings.holdings_file:
        return SpreadsheetHoldingsSource(settings.holdings_file)
    return StaticHoldingsSource()


def build_quote_source(settings: Settings) -> QuoteSource:
    """Simulated quote source tuned from settings."""
    return SimulatedQuoteSource(
        price_jitter=settings.quote_price_jitter,
        latency_seconds=settings.quote_latency_seconds,
    )


def build_refresh_scheduler(
    settings: Settings,
    holdings_source: HoldingsSource | None = None,
    quote_source: QuoteSource | None = None,
) -> RefreshScheduler:
    """Wire sources, pipeline and scheduler for one application instance."""
    pipeline = AggregationPipeline(
        quote_source=quote_source or build_quote_source(settings),
        settings=settings,
        circuit_breaker=QuoteCircuitBreaker(
            failure_threshold=settings.circuit_failure_threshold,
            recovery_timeout=settings.circuit_recovery_timeout,
        ),
    )
    return RefreshScheduler(
        holdings_source=holdings_source or build_holdings_source(settings),
        pipeline=pipeline,
        settings=settings,
    )


def get_refresh_scheduler(request: Request) -> RefreshScheduler:
    """Get the application's refresh scheduler from app state."""
    scheduler: RefreshScheduler = request.app.state.refresh_scheduler
    return scheduler
