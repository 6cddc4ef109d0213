"""
Holdings source interface and shared row conversion.

Sources hand back spreadsheet-shaped rows keyed by the workbook column
headers; rows_to_holdings turns them into Holding models with sequential ids.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any, Protocol

import pandas as pd
import pydantic

from ...core.exceptions import SourceUnavailableError
from ...models.holding import Exchange, Holding
from .symbol_resolver import SymbolResolver

# Spreadsheet column headers
COL_NAME = "Particulars"
COL_PURCHASE_PRICE = "Purchase Price"
COL_QUANTITY = "Quantity"
COL_INVESTMENT = "Investment"
COL_PORTFOLIO_PCT = "Portfolio (%)"
COL_EXCHANGE = "NSE/BSE"
COL_SECTOR = "Sector"

REQUIRED_COLUMNS = (
    COL_NAME,
    COL_PURCHASE_PRICE,
    COL_QUANTITY,
    COL_EXCHANGE,
    COL_SECTOR,
)
OPTIONAL_COLUMNS = (COL_INVESTMENT, COL_PORTFOLIO_PCT)


class HoldingsSource(Protocol):
    """Produces the current list of raw holdings."""

    async def fetch_holdings(self) -> list[Holding]:
        """
        Return holdings in source order.

        Raises:
            SourceUnavailableError: If the holding list cannot be produced
        """
        ...


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return bool(pd.isna(value))


def _row_to_holding(
    row: Mapping[str, Any],
    holding_id: str,
    resolve_symbol: Callable[[str], str],
    source: str,
) -> Holding:
    name = str(row[COL_NAME]).strip()
    purchase_price = float(row[COL_PURCHASE_PRICE])
    quantity = float(row[COL_QUANTITY])

    investment = row.get(COL_INVESTMENT)
    investment = (
        purchase_price * quantity if _is_blank(investment) else float(investment)
    )

    nominal_pct = row.get(COL_PORTFOLIO_PCT)
    nominal_pct = 0.0 if _is_blank(nominal_pct) else float(nominal_pct)

    try:
        exchange = Exchange(str(row[COL_EXCHANGE]).strip().upper())
    except ValueError as e:
        raise SourceUnavailableError(
            f"Unknown exchange '{row[COL_EXCHANGE]}' for {name}",
            source=source,
            row=holding_id,
        ) from e

    return Holding(
        id=holding_id,
        name=name,
        symbol=resolve_symbol(name),
        exchange=exchange,
        sector=str(row[COL_SECTOR]),
        purchase_price=purchase_price,
        quantity=quantity,
        investment=investment,
        portfolio_percentage=nominal_pct,
    )


def rows_to_holdings(
    rows: Iterable[Mapping[str, Any]],
    symbol_resolver: Callable[[str], str] | None = None,
    source: str = "rows",
) -> list[Holding]:
    """
    Convert spreadsheet rows to holdings.

    Rows whose name cell is blank are skipped. Ids are assigned sequentially
    ("1", "2", ...) over the rows that are kept.

    Args:
        rows: Mappings keyed by spreadsheet column header
        symbol_resolver: Name -> symbol callable (default SymbolResolver())
        source: Source name used in error context

    Returns:
        Holdings in row order

    Raises:
        SourceUnavailableError: If a row is missing a required cell or holds
            an invalid value
    """
    resolve_symbol = symbol_resolver or SymbolResolver()
    holdings: list[Holding] = []

    for row in rows:
        if _is_blank(row.get(COL_NAME)):
            continue

        holding_id = str(len(holdings) + 1)
        missing = [col for col in REQUIRED_COLUMNS if _is_blank(row.get(col))]
        if missing:
            raise SourceUnavailableError(
                f"Holding row {holding_id} is missing values for {', '.join(missing)}",
                source=source,
                row=holding_id,
            )

        try:
            holdings.append(_row_to_holding(row, holding_id, resolve_symbol, source))
        except (TypeError, ValueError, pydantic.ValidationError) as e:
            raise SourceUnavailableError(
                f"Invalid holding row {holding_id}: {e}",
                source=source,
                row=holding_id,
            ) from e

    return holdings
