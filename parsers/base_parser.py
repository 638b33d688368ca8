"""
Abstract base class for raw ledger row loaders.

Loaders read a dump of one customer's sheet and return the rows exactly as
the sheet API would: a list of dicts keyed by the API field names, with
placeholders such as "NaN" and "-" left in place for the row filter.
"""
import math
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from config import COLUMN_ALIASES

RawRow = Dict[str, Any]

_FIELD_NAMES = {field.lower(): field for field in COLUMN_ALIASES.values()}


class LedgerLoadError(Exception):
    """Raised when an input file cannot be read as a ledger dump."""


def canonical_column(header: Any) -> Optional[str]:
    """
    Map a sheet header cell onto the API field name.

    Args:
        header: Header cell text ("S.N", "Weight/Qty", "Cheque No", ...)

    Returns:
        The field name, or None if the header is not a ledger column
    """
    if header is None:
        return None
    key = " ".join(str(header).split()).lower()
    if key in COLUMN_ALIASES:
        return COLUMN_ALIASES[key]
    # Already an API field name ("weightQty", "transactionType")
    return _FIELD_NAMES.get(key)


def _empty_to_none(value: Any) -> Any:
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


class BaseParser(ABC):
    """
    Abstract base class for ledger row loaders.
    """

    def __init__(self, filepath: str):
        """
        Initialize the loader with a file path.

        Args:
            filepath: Path to the ledger dump
        """
        self.filepath = filepath
        self._rows: List[RawRow] = []

    @abstractmethod
    def parse(self) -> List[RawRow]:
        """
        Read the file and return raw rows.

        Returns:
            List of row dicts keyed by API field name

        Raises:
            LedgerLoadError: If the file cannot be read
        """

    def _check_exists(self) -> None:
        if not Path(self.filepath).is_file():
            raise LedgerLoadError(f"Input file not found: {self.filepath}")

    @staticmethod
    def _rows_from_records(headers: List[Any], records: Iterable[List[Any]]) -> List[RawRow]:
        """Key each record by the canonical name of its column."""
        keys = [canonical_column(h) or str(h).strip() for h in headers]
        rows = []
        for record in records:
            row = {key: _empty_to_none(value) for key, value in zip(keys, record) if key}
            if any(str(v).strip() for v in row.values() if v is not None):
                rows.append(row)
        return rows

    @property
    def rows(self) -> List[RawRow]:
        """Get the loaded rows."""
        return self._rows
