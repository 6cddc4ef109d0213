"""
Market data quote sources.

- base: QuoteSource protocol
- simulated: Reference data with random variation
- reference_data: Base quotes for the sample portfolio's symbols
"""

from .base import QuoteSource
from .reference_data import REFERENCE_QUOTES
from .simulated import SimulatedQuoteSource

__all__ = ["QuoteSource", "REFERENCE_QUOTES", "SimulatedQuoteSource"]
