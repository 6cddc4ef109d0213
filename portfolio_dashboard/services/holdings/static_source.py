"""
In-memory holdings source.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

import structlog

from ...models.holding import Holding
from .base import rows_to_holdings
from .sample_data import SAMPLE_HOLDING_ROWS

logger = structlog.get_logger()


class StaticHoldingsSource:
    """Serves a fixed list of spreadsheet-shaped rows (defaults to the sample portfolio)."""

    def __init__(
        self,
        rows: Sequence[Mapping[str, Any]] | None = None,
        symbol_resolver: Callable[[str], str] | None = None,
    ):
        self.rows = list(rows) if rows is not None else list(SAMPLE_HOLDING_ROWS)
        self.symbol_resolver = symbol_resolver

    async def fetch_holdings(self) -> list[Holding]:
        holdings = rows_to_holdings(
            self.rows, symbol_resolver=self.symbol_resolver, source="static"
        )
        logger.debug("Static holdings loaded", count=len(holdings))
        return holdings
