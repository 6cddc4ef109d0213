"""
Spreadsheet-backed holdings source.

Reads the portfolio workbook (.xlsx/.xlsm via openpyxl) or a CSV export with
pandas. Expected headers:

    Particulars | Purchase Price | Quantity | Investment | Portfolio (%) | NSE/BSE | Sector

Investment and Portfolio (%) may be absent or blank; Investment is then
derived as purchase price * quantity and the nominal weight defaults to 0.
"""

import asyncio
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import structlog

from ...core.exceptions import ConfigurationError, SourceUnavailableError
from ...models.holding import Holding
from .base import REQUIRED_COLUMNS, rows_to_holdings

logger = structlog.get_logger()

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
CSV_SUFFIXES = {".csv"}


class SpreadsheetHoldingsSource:
    """
    Holdings source reading a spreadsheet file on every fetch.

    The file is re-read each time so edits show up on the next refresh.
    """

    def __init__(
        self,
        path: str | Path,
        symbol_resolver: Callable[[str], str] | None = None,
        sheet_name: str | int = 0,
    ):
        """
        Initialize spreadsheet source.

        Args:
            path: Workbook or CSV path
            symbol_resolver: Name -> symbol callable (default SymbolResolver())
            sheet_name: Worksheet to read for workbooks

        Raises:
            ConfigurationError: If the file type is not supported
        """
        self.path = Path(path)
        self.symbol_resolver = symbol_resolver
        self.sheet_name = sheet_name

        suffix = self.path.suffix.lower()
        if suffix not in EXCEL_SUFFIXES | CSV_SUFFIXES:
            raise ConfigurationError(
                f"Unsupported holdings file type: {suffix or '(none)'}",
                file_path=str(self.path),
            )

    def _read_frame(self) -> pd.DataFrame:
        if self.path.suffix.lower() in CSV_SUFFIXES:
            return pd.read_csv(self.path)
        return pd.read_excel(self.path, sheet_name=self.sheet_name, engine="openpyxl")

    def _load(self) -> list[Holding]:
        if not self.path.exists():
            raise SourceUnavailableError(
                "Holdings file not found",
                source="spreadsheet",
                file_path=str(self.path),
            )

        try:
            df = self._read_frame()
        except Exception as e:
            raise SourceUnavailableError(
                f"Failed to read holdings file: {e}",
                source="spreadsheet",
                file_path=str(self.path),
            ) from e

        df.columns = [str(col).strip() for col in df.columns]
        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise SourceUnavailableError(
                f"Holdings file is missing columns: {', '.join(missing)}",
                source="spreadsheet",
                file_path=str(self.path),
            )

        df = df.dropna(how="all")
        return rows_to_holdings(
            df.to_dict(orient="records"),
            symbol_resolver=self.symbol_resolver,
            source="spreadsheet",
        )

    async def fetch_holdings(self) -> list[Holding]:
        holdings = await asyncio.to_thread(self._load)
        logger.info(
            "Holdings loaded from spreadsheet",
            file_path=str(self.path),
            count=len(holdings),
        )
        return holdings
