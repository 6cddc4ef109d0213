"""
Portfolio snapshot models.

A snapshot is the complete, immutable result of one refresh run: enriched
stocks, sector roll-ups and portfolio-wide totals. Every model is frozen so a
published snapshot can be handed to any number of readers.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .holding import Holding


class PriceSource(str, Enum):
    """Where a stock's current price came from."""

    LIVE = "live"  # Quote source answered
    FALLBACK = "fallback"  # Purchase price used, quote unavailable


class EnrichedStock(Holding):
    """
    Holding enriched with market data and derived metrics.

    portfolio_percentage is recomputed on every run from the live total
    investment and overrides the nominal weight recorded in the source.
    """

    model_config = ConfigDict(frozen=True)

    current_price: float = Field(..., description="Current market price")
    present_value: float = Field(..., description="current_price * quantity")
    gain_loss: float = Field(..., description="present_value - investment")
    gain_loss_percentage: float = Field(
        ..., description="gain_loss / investment * 100 (0 when investment is 0)"
    )
    pe_ratio: float = Field(0.0, description="Price-to-earnings ratio (0 = unknown)")
    latest_earnings: float = Field(0.0, description="Latest EPS (0 = unknown)")
    last_updated: datetime = Field(..., description="Time of the run that produced it")
    price_source: PriceSource = Field(
        PriceSource.LIVE, description="live quote or purchase-price fallback"
    )


class Sector(BaseModel):
    """Stocks sharing one sector label, with aggregate totals."""

    model_config = ConfigDict(frozen=True)

    name: str
    stocks: tuple[EnrichedStock, ...]
    total_investment: float
    total_present_value: float
    total_gain_loss: float
    total_gain_loss_percentage: float
    portfolio_percentage: float = Field(
        0.0, description="Sector investment as a share of portfolio investment"
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def stock_count(self) -> int:
        return len(self.stocks)


class PortfolioSnapshot(BaseModel):
    """Point-in-time computed state of the whole portfolio."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "stocks": [],
                "sectors": [],
                "total_investment": 1455000.0,
                "total_present_value": 1493260.0,
                "total_gain_loss": 38260.0,
                "total_gain_loss_percentage": 2.63,
                "last_updated": "2025-11-01T10:30:00Z",
            }
        },
    )

    stocks: tuple[EnrichedStock, ...]
    sectors: tuple[Sector, ...]
    total_investment: float
    total_present_value: float
    total_gain_loss: float
    total_gain_loss_percentage: float
    last_updated: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def live_quote_count(self) -> int:
        return sum(1 for s in self.stocks if s.price_source == PriceSource.LIVE)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def fallback_quote_count(self) -> int:
        return sum(1 for s in self.stocks if s.price_source == PriceSource.FALLBACK)

    def top_performers(self, limit: int = 3) -> list[EnrichedStock]:
        """Stocks with the highest gain/loss percentage first."""
        return sorted(
            self.stocks, key=lambda s: s.gain_loss_percentage, reverse=True
        )[:limit]

    def worst_performers(self, limit: int = 3) -> list[EnrichedStock]:
        """Stocks with the lowest gain/loss percentage first."""
        return sorted(self.stocks, key=lambda s: s.gain_loss_percentage)[:limit]

    def best_sectors(self, limit: int = 3) -> list[Sector]:
        """Sectors in profit, best percentage first."""
        gaining = [s for s in self.sectors if s.total_gain_loss > 0]
        return sorted(
            gaining, key=lambda s: s.total_gain_loss_percentage, reverse=True
        )[:limit]

    def worst_sectors(self, limit: int = 3) -> list[Sector]:
        """Sectors at a loss, worst percentage first."""
        losing = [s for s in self.sectors if s.total_gain_loss < 0]
        return sorted(losing, key=lambda s: s.total_gain_loss_percentage)[:limit]

    def get_sector(self, name: str) -> Sector | None:
        """Look up a sector by its exact label."""
        for sector in self.sectors:
            if sector.name == name:
                return sector
        return None
