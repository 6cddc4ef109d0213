"""
Portfolio aggregation pipeline.

Turns raw holdings into an immutable PortfolioSnapshot:
1. Looks up a quote per distinct symbol (bounded fan-out, per-lookup timeout)
2. Enriches each holding, falling back to purchase price without a quote
3. Recomputes portfolio weights from the live total investment
4. Rolls stocks up into sectors, largest investment first
5. Computes portfolio totals and stamps the snapshot

Quote problems never fail a run: availability is preferred over completeness.
"""

import asyncio
from collections.abc import Callable, Sequence
from datetime import datetime

import structlog

from ..core.config import Settings, get_settings
from ..core.utils.circuit_breaker import QuoteCircuitBreaker
from ..core.utils.date_utils import utcnow
from ..core.utils.portfolio_math import safe_percentage
from ..models.holding import Holding
from ..models.portfolio import EnrichedStock, PortfolioSnapshot, PriceSource, Sector
from ..models.quote import QuoteFound, QuoteResult, QuoteTransportError
from .market_data.base import QuoteSource

logger = structlog.get_logger()


class AggregationPipeline:
    """Computes portfolio snapshots from holdings and a quote source."""

    def __init__(
        self,
        quote_source: QuoteSource,
        settings: Settings | None = None,
        circuit_breaker: QuoteCircuitBreaker | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Initialize pipeline.

        Args:
            quote_source: Per-symbol market data lookup
            settings: Application settings (timeout and fan-out limits)
            circuit_breaker: Optional per-symbol breaker for failing feeds
            clock: Time source for snapshot timestamps
        """
        self.quote_source = quote_source
        self.settings = settings or get_settings()
        self.circuit_breaker = circuit_breaker
        self.clock = clock

    async def _lookup(self, symbol: str, semaphore: asyncio.Semaphore) -> QuoteResult:
        """Fetch one quote; every failure mode comes back as a result."""
        if self.circuit_breaker and not self.circuit_breaker.allows(symbol):
            return QuoteTransportError(symbol=symbol, detail="circuit open")

        async with semaphore:
            try:
                result = await asyncio.wait_for(
                    self.quote_source.get_quote(symbol),
                    timeout=self.settings.quote_timeout_seconds,
                )
            except TimeoutError:
                result = QuoteTransportError(
                    symbol=symbol,
                    detail=f"timed out after {self.settings.quote_timeout_seconds}s",
                )
            except Exception as e:
                result = QuoteTransportError(
                    symbol=symbol, detail=f"{type(e).__name__}: {e}"
                )

        if isinstance(result, QuoteTransportError):
            logger.warning(
                "Quote unavailable, using purchase price",
                symbol=symbol,
                error=result.detail,
            )
            if self.circuit_breaker:
                self.circuit_breaker.record_failure(symbol, result.detail)
        elif self.circuit_breaker:
            self.circuit_breaker.record_success(symbol)

        return result

    async def fetch_quotes(self, symbols: Sequence[str]) -> dict[str, QuoteResult]:
        """Look up each distinct symbol once, concurrently, keyed by symbol."""
        unique = list(dict.fromkeys(symbols))
        semaphore = asyncio.Semaphore(max(1, self.settings.quote_concurrency))
        results = await asyncio.gather(
            *(self._lookup(symbol, semaphore) for symbol in unique)
        )
        return dict(zip(unique, results, strict=True))

    @staticmethod
    def enrich(
        holding: Holding,
        result: QuoteResult | None,
        total_investment: float,
        timestamp: datetime,
    ) -> EnrichedStock:
        """Derive one stock's metrics, applying the fallback without a quote."""
        base = holding.model_dump()
        base["portfolio_percentage"] = safe_percentage(
            holding.investment, total_investment
        )

        if isinstance(result, QuoteFound):
            quote = result.quote
            present_value = quote.current_price * holding.quantity
            gain_loss = present_value - holding.investment
            return EnrichedStock(
                **base,
                current_price=quote.current_price,
                present_value=present_value,
                gain_loss=gain_loss,
                gain_loss_percentage=safe_percentage(gain_loss, holding.investment),
                pe_ratio=quote.pe_ratio,
                latest_earnings=quote.latest_earnings,
                last_updated=timestamp,
                price_source=PriceSource.LIVE,
            )

        return EnrichedStock(
            **base,
            current_price=holding.purchase_price,
            present_value=holding.investment,
            gain_loss=0.0,
            gain_loss_percentage=0.0,
            pe_ratio=0.0,
            latest_earnings=0.0,
            last_updated=timestamp,
            price_source=PriceSource.FALLBACK,
        )

    @staticmethod
    def build_sectors(
        stocks: Sequence[EnrichedStock], total_investment: float
    ) -> tuple[Sector, ...]:
        """Group by exact sector label; largest total investment first, stable on ties."""
        groups: dict[str, list[EnrichedStock]] = {}
        for stock in stocks:
            groups.setdefault(stock.sector, []).append(stock)

        sectors = []
        for name, members in groups.items():
            investment = sum(s.investment for s in members)
            present_value = sum(s.present_value for s in members)
            gain_loss = present_value - investment
            sectors.append(
                Sector(
                    name=name,
                    stocks=tuple(members),
                    total_investment=investment,
                    total_present_value=present_value,
                    total_gain_loss=gain_loss,
                    total_gain_loss_percentage=safe_percentage(gain_loss, investment),
                    portfolio_percentage=safe_percentage(investment, total_investment),
                )
            )

        sectors.sort(key=lambda s: s.total_investment, reverse=True)
        return tuple(sectors)

    async def run(self, holdings: Sequence[Holding]) -> PortfolioSnapshot:
        """
        Compute a snapshot for the given holdings.

        Args:
            holdings: Raw holdings in source order

        Returns:
            Immutable snapshot; quote failures are absorbed per holding
        """
        quotes = await self.fetch_quotes([h.symbol for h in holdings])
        timestamp = self.clock()

        total_investment = sum(h.investment for h in holdings)
        stocks = tuple(
            self.enrich(h, quotes.get(h.symbol), total_investment, timestamp)
            for h in holdings
        )

        total_present_value = sum(s.present_value for s in stocks)
        total_gain_loss = total_present_value - total_investment
        sectors = self.build_sectors(stocks, total_investment)

        snapshot = PortfolioSnapshot(
            stocks=stocks,
            sectors=sectors,
            total_investment=total_investment,
            total_present_value=total_present_value,
            total_gain_loss=total_gain_loss,
            total_gain_loss_percentage=safe_percentage(
                total_gain_loss, total_investment
            ),
            last_updated=timestamp,
        )

        logger.info(
            "Portfolio snapshot computed",
            holdings=len(stocks),
            live_quotes=snapshot.live_quote_count,
            fallback_quotes=snapshot.fallback_quote_count,
            sectors=len(sectors),
            total_investment=round(total_investment, 2),
            total_gain_loss=round(total_gain_loss, 2),
        )
        return snapshot
