"""
Quote data returned by quote sources.

A lookup never raises for a missing symbol; it returns one of three results:
- QuoteFound: price and ratio data are available
- QuoteNotFound: the source has no data for the symbol
- QuoteTransportError: the lookup itself failed (network, timeout)
"""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Quote(BaseModel):
    """Current market data for one symbol."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    symbol: str = Field(..., description="Ticker symbol")
    current_price: float = Field(..., description="Current market price", ge=0)
    pe_ratio: float = Field(..., description="Price-to-earnings ratio")
    latest_earnings: float = Field(..., description="Latest earnings per share")


@dataclass(frozen=True)
class QuoteFound:
    """Successful lookup."""

    quote: Quote
    kind: Literal["found"] = "found"

    @property
    def symbol(self) -> str:
        return self.quote.symbol


@dataclass(frozen=True)
class QuoteNotFound:
    """The source has no data for this symbol."""

    symbol: str
    kind: Literal["not_found"] = "not_found"


@dataclass(frozen=True)
class QuoteTransportError:
    """The lookup failed before an answer was obtained."""

    symbol: str
    detail: str
    kind: Literal["transport_error"] = "transport_error"


QuoteResult = QuoteFound | QuoteNotFound | QuoteTransportError
