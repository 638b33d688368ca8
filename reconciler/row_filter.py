"""
Row filter for the customer transaction feed.

The sheet API returns everything under the customer's tab, including
re-read header rows, blank lines and rows whose numeric cells came back
as the literal "NaN". This is a best-effort heuristic, not a validated
parse: rows that look like artifacts are dropped silently.
"""
import logging
import math
from collections import abc
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from config import (
    HEADER_MARKERS,
    MISSING_DATE_MARKERS,
    NAN_SENTINELS,
    RATE_NAN_SENTINELS,
    get_config,
)

logger = logging.getLogger(__name__)


def _cell(row: Mapping[str, Any], key: str) -> Optional[str]:
    value = row.get(key)
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    try:
        return str(value).strip()
    except ValueError:
        return None


def is_header_row(row: Mapping[str, Any], header_markers: Optional[Mapping[str, str]] = None) -> bool:
    """True if any column holds its own header text (e.g. date == "Date")."""
    markers = HEADER_MARKERS if header_markers is None else header_markers
    return any(_cell(row, key) == marker for key, marker in markers.items())


def has_missing_date(row: Mapping[str, Any]) -> bool:
    """True if the date is absent, blank or the "-" placeholder."""
    date_value = _cell(row, 'date')
    return date_value is None or date_value in MISSING_DATE_MARKERS


def has_sentinel_values(
    row: Mapping[str, Any],
    sentinels: Sequence[str] = NAN_SENTINELS,
    rate_sentinels: Sequence[str] = RATE_NAN_SENTINELS,
) -> bool:
    """True if item, weight or rate came back as a "NaN" placeholder."""
    return (
        _cell(row, 'item') in sentinels
        or _cell(row, 'weightQty') in sentinels
        or _cell(row, 'rate') in rate_sentinels
    )


class RowFilter:
    """
    Drops spreadsheet artifacts from a raw row list.

    In strict mode rows with "NaN" in item, weight or rate are treated as
    artifacts too; lenient mode keeps them and lets the normalizer blank
    the placeholders.
    """

    def __init__(
        self,
        strict: Optional[bool] = None,
        header_markers: Optional[Mapping[str, str]] = None,
        sentinels: Sequence[str] = NAN_SENTINELS,
        rate_sentinels: Sequence[str] = RATE_NAN_SENTINELS,
    ):
        """
        Initialize the filter.

        Args:
            strict: Drop rows with "NaN" placeholders (defaults to config)
            header_markers: Column -> header text map (defaults to config)
            sentinels: Item and weight placeholders that mark an artifact row
            rate_sentinels: Rate placeholders that mark an artifact row
        """
        self.strict = get_config().strict_filter if strict is None else strict
        self.header_markers = dict(HEADER_MARKERS if header_markers is None else header_markers)
        self.sentinels = tuple(sentinels)
        self.rate_sentinels = tuple(rate_sentinels)

    def rejection_reason(self, row: Any) -> Optional[str]:
        """Return why a row would be dropped, or None if it is kept."""
        if not isinstance(row, abc.Mapping):
            return "not a row"
        if is_header_row(row, self.header_markers):
            return "header row"
        if has_missing_date(row):
            return "missing date"
        if self.strict and has_sentinel_values(row, self.sentinels, self.rate_sentinels):
            return "NaN placeholder"
        return None

    def accepts(self, row: Any) -> bool:
        return self.rejection_reason(row) is None

    def apply(self, rows: Iterable[Any]) -> List[Mapping[str, Any]]:
        """
        Filter rows, preserving their order.

        Args:
            rows: Raw rows from the sheet API

        Returns:
            The rows that look like real transactions
        """
        kept: List[Mapping[str, Any]] = []
        dropped = 0

        if not isinstance(rows, abc.Iterable) or isinstance(rows, (str, bytes, abc.Mapping)):
            logger.debug("Expected a list of rows, got %s", type(rows).__name__)
            return kept

        for position, row in enumerate(rows):
            reason = self.rejection_reason(row)
            if reason is None:
                kept.append(row)
            else:
                dropped += 1
                logger.debug("Dropping row %d: %s", position, reason)

        if dropped:
            logger.debug("Row filter kept %d rows, dropped %d", len(kept), dropped)

        return kept
