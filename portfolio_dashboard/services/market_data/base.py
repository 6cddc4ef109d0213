"""
Quote source interface.
"""

from typing import Protocol

from ...models.quote import QuoteResult


class QuoteSource(Protocol):
    """Looks up current market data for one symbol."""

    async def get_quote(self, symbol: str) -> QuoteResult:
        """
        Return quote data for symbol.

        A symbol the source does not know yields QuoteNotFound rather than an
        exception. Transport problems should be reported as
        QuoteTransportError; the pipeline also converts stray exceptions and
        timeouts into that result.
        """
        ...
