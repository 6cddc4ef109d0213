"""
Pydantic models for holdings, quotes and portfolio snapshots.
"""

from .holding import Exchange, Holding
from .portfolio import EnrichedStock, PortfolioSnapshot, PriceSource, Sector
from .quote import (
    Quote,
    QuoteFound,
    QuoteNotFound,
    QuoteResult,
    QuoteTransportError,
)

__all__ = [
    "Exchange",
    "Holding",
    "EnrichedStock",
    "PortfolioSnapshot",
    "PriceSource",
    "Sector",
    "Quote",
    "QuoteFound",
    "QuoteNotFound",
    "QuoteResult",
    "QuoteTransportError",
]
