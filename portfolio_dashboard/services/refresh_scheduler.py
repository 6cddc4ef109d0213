"""
Refresh scheduler owning the published portfolio snapshot.

Runs holdings source + aggregation pipeline on demand and on a fixed
interval. Guarantees:
- At most one run is in flight; a refresh requested meanwhile joins it
- A run publishes only on success; failures keep the previous snapshot
- At most one timer is active; start() replaces it, stop() is idempotent
- stop() prevents future ticks; a run already dispatched still publishes
"""

import asyncio
from datetime import datetime
from enum import Enum
from typing import Any

import structlog

from ..core.config import Settings, get_settings
from ..core.exceptions import (
    AppError,
    NotInitializedError,
    RefreshFailedError,
    SourceUnavailableError,
    ValidationError,
)
from ..core.utils.date_utils import isoformat_or_none, utcnow
from ..models.portfolio import PortfolioSnapshot
from .holdings.base import HoldingsSource
from .portfolio_pipeline import AggregationPipeline

logger = structlog.get_logger()


class SchedulerState(str, Enum):
    """Timer state."""

    IDLE = "idle"
    SCHEDULED = "scheduled"


class RefreshScheduler:
    """Caller-owned portfolio refresh service with a periodic timer."""

    def __init__(
        self,
        holdings_source: HoldingsSource,
        pipeline: AggregationPipeline,
        settings: Settings | None = None,
    ):
        """
        Initialize scheduler in the IDLE state with no snapshot.

        Args:
            holdings_source: Produces raw holdings for each run
            pipeline: Computes snapshots from holdings
            settings: Application settings (default refresh interval)
        """
        self.holdings_source = holdings_source
        self.pipeline = pipeline
        self.settings = settings or get_settings()

        self._snapshot: PortfolioSnapshot | None = None
        self._timer: asyncio.Task[None] | None = None
        self._in_flight: asyncio.Task[PortfolioSnapshot] | None = None
        self._interval_ms: int | None = None

        self.refresh_count = 0
        self.failure_count = 0
        self.last_success_at: datetime | None = None
        self.last_failure_at: datetime | None = None
        self.last_error: str | None = None

    # ===== Snapshot access =====

    def get_snapshot(self) -> PortfolioSnapshot:
        """
        Latest published snapshot.

        Raises:
            NotInitializedError: If no refresh has completed successfully
        """
        if self._snapshot is None:
            raise NotInitializedError(
                "Portfolio not initialized. Trigger a refresh first."
            )
        return self._snapshot

    @property
    def is_ready(self) -> bool:
        return self._snapshot is not None

    @property
    def state(self) -> SchedulerState:
        if self._timer is not None and not self._timer.done():
            return SchedulerState.SCHEDULED
        return SchedulerState.IDLE

    @property
    def interval_ms(self) -> int | None:
        return self._interval_ms if self.state == SchedulerState.SCHEDULED else None

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    # ===== Refresh =====

    async def _run(self) -> PortfolioSnapshot:
        try:
            try:
                holdings = await self.holdings_source.fetch_holdings()
            except SourceUnavailableError:
                raise
            except Exception as e:
                raise SourceUnavailableError(
                    f"Holdings source failed: {e}",
                    source=type(self.holdings_source).__name__,
                ) from e

            try:
                snapshot = await self.pipeline.run(holdings)
            except AppError:
                raise
            except Exception as e:
                raise RefreshFailedError(
                    f"Portfolio aggregation failed: {e}",
                    error_type_name=type(e).__name__,
                ) from e
        except AppError as e:
            self.failure_count += 1
            self.last_failure_at = utcnow()
            self.last_error = e.message
            logger.error("Portfolio refresh failed, keeping last snapshot", **e.to_dict())
            raise
        finally:
            self._in_flight = None

        self._snapshot = snapshot
        self.refresh_count += 1
        self.last_success_at = snapshot.last_updated
        self.last_error = None
        logger.info(
            "Portfolio snapshot published",
            refresh_count=self.refresh_count,
            holdings=len(snapshot.stocks),
        )
        return snapshot

    @staticmethod
    def _consume_result(task: asyncio.Task[PortfolioSnapshot]) -> None:
        # Failures are logged in _run; retrieve them so an abandoned task
        # does not warn at garbage collection.
        if not task.cancelled():
            task.exception()

    async def refresh_now(self) -> PortfolioSnapshot:
        """
        Run the pipeline now and publish the result.

        A call made while a run is in flight joins that run instead of
        starting another one.

        Returns:
            The published snapshot

        Raises:
            SourceUnavailableError: Holdings could not be loaded
            RefreshFailedError: Aggregation failed unexpectedly
        """
        task = self._in_flight
        if task is None or task.done():
            task = asyncio.create_task(self._run())
            task.add_done_callback(self._consume_result)
            self._in_flight = task
        else:
            logger.debug("Refresh already in flight, joining it")

        # Shielded: a cancelled caller (e.g. a stopped timer) leaves the run
        # to finish and publish.
        return await asyncio.shield(task)

    async def initialize(self) -> PortfolioSnapshot:
        """Publish a first snapshot if none exists yet."""
        if self._snapshot is None:
            return await self.refresh_now()
        return self._snapshot

    # ===== Timer =====

    async def _tick_loop(self, interval_ms: int) -> None:
        interval_seconds = interval_ms / 1000
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                await self.refresh_now()
            except AppError as e:
                logger.warning(
                    "Scheduled refresh failed, will retry next tick",
                    interval_ms=interval_ms,
                    error=e.message,
                    error_type=e.error_type,
                )

    def start(self, interval_ms: int | None = None) -> None:
        """
        Schedule periodic refreshes, replacing any active timer.

        Must be called with a running event loop.

        Args:
            interval_ms: Positive interval in milliseconds
                (default settings.refresh_interval_ms)

        Raises:
            ValidationError: If interval_ms is not a positive integer
        """
        if interval_ms is None:
            interval_ms = self.settings.refresh_interval_ms
        if (
            isinstance(interval_ms, bool)
            or not isinstance(interval_ms, int)
            or interval_ms <= 0
        ):
            raise ValidationError(
                "Refresh interval must be a positive integer (ms)",
                interval_ms=interval_ms,
            )

        replaced = self._timer is not None
        if self._timer is not None:
            self._timer.cancel()

        self._timer = asyncio.create_task(self._tick_loop(interval_ms))
        self._interval_ms = interval_ms
        logger.info("Auto-refresh scheduled", interval_ms=interval_ms, replaced=replaced)

    def stop(self) -> None:
        """Cancel the timer if one is active; safe to call repeatedly."""
        if self._timer is None:
            return
        self._timer.cancel()
        self._timer = None
        self._interval_ms = None
        logger.info("Auto-refresh stopped")

    async def shutdown(self) -> None:
        """Stop the timer and wait for the cancelled loop and any in-flight run."""
        timer = self._timer
        self.stop()
        pending = [t for t in (timer, self._in_flight) if t is not None]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    def status(self) -> dict[str, Any]:
        """Scheduler and refresh bookkeeping for the status endpoint."""
        return {
            "state": self.state.value,
            "interval_ms": self.interval_ms,
            "ready": self.is_ready,
            "in_flight": self.in_flight,
            "refresh_count": self.refresh_count,
            "failure_count": self.failure_count,
            "last_success_at": isoformat_or_none(self.last_success_at),
            "last_failure_at": isoformat_or_none(self.last_failure_at),
            "last_error": self.last_error,
        }
