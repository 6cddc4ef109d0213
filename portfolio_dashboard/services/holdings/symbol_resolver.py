"""
Company name to ticker symbol resolution.

The spreadsheet records company names only. Known names map to their NSE
symbols; anything else goes through a fallback heuristic that callers can
replace.
"""

from collections.abc import Callable, Mapping

import structlog

logger = structlog.get_logger()

KNOWN_SYMBOLS: dict[str, str] = {
    "Reliance Industries": "RELIANCE",
    "Tata Consultancy Services": "TATA",
    "HDFC Bank": "HDFCBANK",
    "Infosys": "INFY",
    "ICICI Bank": "ICICIBANK",
    "Hindustan Unilever": "HINDUNILVR",
    "ITC": "ITC",
    "State Bank of India": "SBIN",
    "Bharti Airtel": "BHARTIARTL",
    "Axis Bank": "AXISBANK",
}


def first_word_symbol(name: str) -> str:
    """
    Best-effort symbol: first word of the name, uppercased.

    Examples:
        >>> first_word_symbol("Wipro Limited")
        'WIPRO'
    """
    words = name.split()
    return words[0].upper() if words else ""


class SymbolResolver:
    """
    Resolve holding names to symbols.

    Args:
        overrides: Extra or replacement name -> symbol entries
        fallback: Heuristic for names with no known symbol
        include_defaults: Start from KNOWN_SYMBOLS
    """

    def __init__(
        self,
        overrides: Mapping[str, str] | None = None,
        fallback: Callable[[str], str] = first_word_symbol,
        include_defaults: bool = True,
    ):
        self._symbols: dict[str, str] = dict(KNOWN_SYMBOLS) if include_defaults else {}
        if overrides:
            self._symbols.update(overrides)
        self._fallback = fallback

    def resolve(self, name: str) -> str:
        """Symbol for a holding name."""
        symbol = self._symbols.get(name)
        if symbol:
            return symbol

        symbol = self._fallback(name)
        logger.debug("Symbol derived from name", name=name, symbol=symbol)
        return symbol

    def __call__(self, name: str) -> str:
        return self.resolve(name)
