"""
CSV loader for exported customer sheets.

Handles:
- Title lines above the header row
- Header rows repeated inside the data (left for the row filter)
- Files saved by Excel with a BOM or in a legacy code page
"""
import io
import logging
from typing import List, Optional

import pandas as pd

from config import FILE_ENCODINGS, get_config
from parsers.base_parser import BaseParser, LedgerLoadError, RawRow, canonical_column

logger = logging.getLogger(__name__)

# Minimum number of recognised columns for a line to count as the header
MIN_HEADER_MATCHES = 3


class CSVRowParser(BaseParser):
    """
    Loader for CSV exports of a customer's ledger tab.

    Every cell is read as text and blanks stay blank, so placeholders such
    as "NaN" reach the row filter untouched.
    """

    def __init__(self, filepath: str, encodings: Optional[List[str]] = None):
        """
        Initialize the CSV loader.

        Args:
            filepath: Path to the CSV file
            encodings: Encodings to try in order (defaults to config)
        """
        super().__init__(filepath)
        self.encodings = encodings or get_config().get("supported_encodings", FILE_ENCODINGS)
        self._encoding: Optional[str] = None

    def parse(self) -> List[RawRow]:
        self._check_exists()

        text = self._read_text()
        header_line = self._find_header_line(text)

        try:
            df = pd.read_csv(
                io.StringIO(text),
                skiprows=header_line,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise LedgerLoadError(f"Could not parse CSV {self.filepath}: {e}") from e

        self._rows = self._rows_from_records(list(df.columns), df.values.tolist())
        logger.info(
            "Loaded %d rows from %s (encoding %s)", len(self._rows), self.filepath, self._encoding
        )
        return self._rows

    def _read_text(self) -> str:
        """
        Read the file with encoding fallback.

        Raises:
            LedgerLoadError: If no supported encoding can decode the file
        """
        for encoding in self.encodings:
            try:
                with open(self.filepath, 'r', encoding=encoding, newline='') as f:
                    text = f.read()
            except UnicodeDecodeError:
                continue
            self._encoding = encoding
            return text

        raise LedgerLoadError(f"Failed to read {self.filepath} with any supported encoding")

    def _find_header_line(self, text: str) -> int:
        """Index of the first line that looks like the ledger header."""
        lines = text.splitlines()
        for index, line in enumerate(lines[:20]):
            cells = line.split(',')
            matches = sum(1 for cell in cells if canonical_column(cell.strip().strip('"')))
            if matches >= MIN_HEADER_MATCHES:
                return index

        logger.warning("Could not identify header row in %s, using line 0", self.filepath)
        return 0
