"""
Holding model for the portfolio spreadsheet.

Represents one recorded stock position before market enrichment.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Exchange(str, Enum):
    """Listing exchange recorded in the spreadsheet's NSE/BSE column."""

    NSE = "NSE"
    BSE = "BSE"


class Holding(BaseModel):
    """
    Raw holding as produced by a holdings source.

    Immutable within a refresh run.
    """

    model_config = ConfigDict(
        frozen=True,
        allow_inf_nan=False,
        json_schema_extra={
            "example": {
                "id": "1",
                "name": "Reliance Industries",
                "symbol": "RELIANCE",
                "exchange": "NSE",
                "sector": "Oil & Gas",
                "purchase_price": 2400.0,
                "quantity": 100,
                "investment": 240000.0,
                "portfolio_percentage": 15.5,
            }
        },
    )

    id: str = Field(..., description="Sequential identifier in source order")
    name: str = Field(..., description="Company name (spreadsheet 'Particulars')")
    symbol: str = Field(..., description="Ticker symbol used for quote lookups")
    exchange: Exchange = Field(..., description="Listing exchange")
    sector: str = Field(..., description="Sector label, grouped case-sensitively")
    purchase_price: float = Field(..., description="Purchase price per unit", ge=0)
    quantity: float = Field(..., description="Units held", ge=0)
    investment: float = Field(..., description="Amount invested (price * quantity)", ge=0)
    portfolio_percentage: float = Field(
        0.0, description="Nominal portfolio weight as recorded in the source"
    )
