"""
XLSX loader for downloaded customer sheets.
"""
import logging
import zipfile
from typing import List, Optional, Union

import pandas as pd

from parsers.base_parser import BaseParser, LedgerLoadError, RawRow, canonical_column

logger = logging.getLogger(__name__)


class XLSXRowParser(BaseParser):
    """
    Loader for an Excel download of the ledger workbook.
    """

    def __init__(self, filepath: str, sheet_name: Optional[Union[str, int]] = None):
        """
        Initialize the XLSX loader.

        Args:
            filepath: Path to the Excel file
            sheet_name: Customer tab to read (defaults to the first sheet)
        """
        super().__init__(filepath)
        self.sheet_name = sheet_name
        self._header_row: Optional[int] = None

    def parse(self) -> List[RawRow]:
        self._check_exists()

        df_raw = self._read_excel_raw()
        if df_raw.empty:
            logger.warning("Sheet is empty: %s", self.filepath)
            self._rows = []
            return self._rows

        self._header_row = self._find_header_row(df_raw)
        headers = list(df_raw.iloc[self._header_row])
        records = df_raw.iloc[self._header_row + 1:].values.tolist()

        self._rows = self._rows_from_records(headers, records)
        logger.info(
            "Loaded %d rows from %s (header at row %d)",
            len(self._rows), self.filepath, self._header_row,
        )
        return self._rows

    def _read_excel_raw(self) -> pd.DataFrame:
        """Read the sheet without assuming a header, every cell as text."""
        try:
            return pd.read_excel(
                self.filepath,
                sheet_name=self.sheet_name or 0,
                header=None,
                dtype=str,
                keep_default_na=False,
            )
        except (OSError, ValueError, KeyError, zipfile.BadZipFile) as e:
            raise LedgerLoadError(f"Could not read Excel file {self.filepath}: {e}") from e

    def _find_header_row(self, df: pd.DataFrame) -> int:
        """
        Find the header row by counting recognised column names.

        Args:
            df: Raw DataFrame

        Returns:
            Index of the header row (0-based)
        """
        best_row = 0
        best_score = 0

        for idx in range(min(20, len(df))):
            score = sum(1 for value in df.iloc[idx] if canonical_column(value))
            if score > best_score:
                best_score = score
                best_row = idx

        if best_score < 3:
            logger.warning("Could not reliably identify header row, using row 0")
            return 0

        return best_row
