"""
Shared fixtures and test doubles for portfolio pipeline tests.
"""

import asyncio
from datetime import UTC, datetime

import pytest

from portfolio_dashboard.core.config import Settings
from portfolio_dashboard.models.holding import Exchange, Holding
from portfolio_dashboard.models.quote import (
    Quote,
    QuoteFound,
    QuoteNotFound,
    QuoteResult,
)

FIXED_TIME = datetime(2025, 11, 1, 10, 30, tzinfo=UTC)


def make_holding(
    symbol: str = "A",
    investment: float = 100.0,
    quantity: float = 10.0,
    purchase_price: float | None = None,
    sector: str = "Technology",
    holding_id: str = "1",
    name: str | None = None,
    portfolio_percentage: float = 0.0,
) -> Holding:
    """Build a Holding; purchase price defaults to investment / quantity."""
    if purchase_price is None:
        purchase_price = investment / quantity if quantity else 0.0
    return Holding(
        id=holding_id,
        name=name or f"{symbol} Ltd",
        symbol=symbol,
        exchange=Exchange.NSE,
        sector=sector,
        purchase_price=purchase_price,
        quantity=quantity,
        investment=investment,
        portfolio_percentage=portfolio_percentage,
    )


def found(symbol: str, price: float, pe: float = 20.0, eps: float = 50.0) -> QuoteFound:
    return QuoteFound(
        quote=Quote(symbol=symbol, current_price=price, pe_ratio=pe, latest_earnings=eps)
    )


class FakeQuoteSource:
    """Quote source answering from a dict; unknown symbols are not found."""

    def __init__(
        self,
        results: dict[str, QuoteResult | Exception] | None = None,
        delay: float = 0.0,
    ):
        self.results = results or {}
        self.delay = delay
        self.calls: list[str] = []

    async def get_quote(self, symbol: str) -> QuoteResult:
        self.calls.append(symbol)
        if self.delay:
            await asyncio.sleep(self.delay)
        result = self.results.get(symbol, QuoteNotFound(symbol=symbol))
        if isinstance(result, Exception):
            raise result
        return result


class FakeHoldingsSource:
    """Holdings source returning a fixed list, or raising a configured error."""

    def __init__(self, holdings: list[Holding] | None = None, error: Exception | None = None):
        self.holdings = holdings or []
        self.error = error
        self.calls = 0

    async def fetch_holdings(self) -> list[Holding]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.holdings)


@pytest.fixture
def settings():
    """Test settings with short quote timeout."""
    return Settings(
        environment="test",
        quote_timeout_seconds=0.5,
        quote_concurrency=4,
        refresh_interval_ms=15000,
    )


@pytest.fixture
def fixed_clock():
    """Clock returning a constant timestamp."""
    return lambda: FIXED_TIME
