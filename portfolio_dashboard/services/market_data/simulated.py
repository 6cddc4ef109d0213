"""
Simulated quote source.

Stands in for two market data feeds: a price feed (current price) and a
ratio feed (P/E and latest earnings). Both are looked up concurrently and a
quote is only returned when both feeds know the symbol. Each answer is the
reference value plus uniform noise of +/- jitter/2.
"""

import asyncio
import random
from collections.abc import Iterable, Mapping

import structlog

from ...core.exceptions import QuoteUnavailableError
from ...models.quote import (
    Quote,
    QuoteFound,
    QuoteNotFound,
    QuoteResult,
    QuoteTransportError,
)
from .reference_data import REFERENCE_QUOTES

logger = structlog.get_logger()


class SimulatedQuoteSource:
    """Quote source backed by reference data with random variation."""

    def __init__(
        self,
        reference: Mapping[str, Quote] | None = None,
        price_jitter: float = 10.0,
        ratio_jitter: float = 2.0,
        earnings_jitter: float = 5.0,
        latency_seconds: float = 0.0,
        failing_symbols: Iterable[str] = (),
        rng: random.Random | None = None,
    ):
        """
        Initialize simulated source.

        Args:
            reference: Base quotes by symbol (default REFERENCE_QUOTES)
            price_jitter: Width of the uniform noise added to prices
            ratio_jitter: Width of the noise added to P/E ratios
            earnings_jitter: Width of the noise added to earnings
            latency_seconds: Simulated network delay per feed call
            failing_symbols: Symbols whose lookups fail at the transport level
            rng: Random generator (seed one for reproducible output)
        """
        self.reference = dict(reference) if reference is not None else dict(REFERENCE_QUOTES)
        self.price_jitter = price_jitter
        self.ratio_jitter = ratio_jitter
        self.earnings_jitter = earnings_jitter
        self.latency_seconds = latency_seconds
        self.failing_symbols = set(failing_symbols)
        self._rng = rng or random.Random()

    def _vary(self, value: float, jitter: float) -> float:
        return value + (self._rng.random() - 0.5) * jitter

    async def _delay(self) -> None:
        if self.latency_seconds > 0:
            await asyncio.sleep(self.latency_seconds)

    async def _fetch_price(self, symbol: str) -> float | None:
        await self._delay()
        if symbol in self.failing_symbols:
            raise QuoteUnavailableError("Price feed unreachable", symbol=symbol)
        base = self.reference.get(symbol)
        if base is None:
            return None
        return self._vary(base.current_price, self.price_jitter)

    async def _fetch_ratios(self, symbol: str) -> tuple[float, float] | None:
        await self._delay()
        if symbol in self.failing_symbols:
            raise QuoteUnavailableError("Ratio feed unreachable", symbol=symbol)
        base = self.reference.get(symbol)
        if base is None:
            return None
        return (
            self._vary(base.pe_ratio, self.ratio_jitter),
            self._vary(base.latest_earnings, self.earnings_jitter),
        )

    async def get_quote(self, symbol: str) -> QuoteResult:
        try:
            price, ratios = await asyncio.gather(
                self._fetch_price(symbol), self._fetch_ratios(symbol)
            )
        except QuoteUnavailableError as e:
            logger.warning("Simulated feed failed", symbol=symbol, error=e.message)
            return QuoteTransportError(symbol=symbol, detail=e.message)

        if price is None or ratios is None:
            return QuoteNotFound(symbol=symbol)

        pe_ratio, latest_earnings = ratios
        return QuoteFound(
            quote=Quote(
                symbol=symbol,
                current_price=price,
                pe_ratio=pe_ratio,
                latest_earnings=latest_earnings,
            )
        )
