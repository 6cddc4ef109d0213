"""
Core utility functions for the portfolio backend.
"""

from .circuit_breaker import CircuitState, QuoteCircuitBreaker
from .date_utils import isoformat_or_none, utcnow
from .portfolio_math import safe_percentage

__all__ = [
    "CircuitState",
    "QuoteCircuitBreaker",
    "isoformat_or_none",
    "safe_percentage",
    "utcnow",
]
