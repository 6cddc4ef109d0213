"""
Holdings sources.

- base: HoldingsSource protocol and spreadsheet row conversion
- spreadsheet_source: Excel/CSV workbook reader
- static_source: In-memory rows (sample portfolio by default)
- symbol_resolver: Company name -> ticker symbol mapping
"""

from .base import HoldingsSource, rows_to_holdings
from .sample_data import SAMPLE_HOLDING_ROWS
from .spreadsheet_source import SpreadsheetHoldingsSource
from .static_source import StaticHoldingsSource
from .symbol_resolver import KNOWN_SYMBOLS, SymbolResolver, first_word_symbol

__all__ = [
    "HoldingsSource",
    "rows_to_holdings",
    "SAMPLE_HOLDING_ROWS",
    "SpreadsheetHoldingsSource",
    "StaticHoldingsSource",
    "KNOWN_SYMBOLS",
    "SymbolResolver",
    "first_word_symbol",
]
