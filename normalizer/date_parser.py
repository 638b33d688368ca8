"""
Date parser for the ledger's date column.

The sheet API returns dates either as the text typed into the cell or as
ISO timestamps ("2024-01-01T19:00:00.000Z"). Transactions keep the text;
parsing is only needed for exports that want real date cells.
"""
from datetime import date, datetime
from typing import Optional, Union

from dateutil import parser as dateutil_parser

from config import DATE_FORMATS


def parse_date(value: Union[str, datetime, date, None]) -> Optional[date]:
    """
    Parse a date value from various formats into a Python date object.

    Args:
        value: A string that might be a date, or a datetime/date object

    Returns:
        A date object if parsing succeeds, None otherwise
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    value_str = " ".join(str(value).split())

    if not value_str or value_str == "-":
        return None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value_str, fmt).date()
        except ValueError:
            continue

    # ISO timestamps and anything else dateutil understands
    try:
        return dateutil_parser.parse(value_str, dayfirst=True).date()
    except (ValueError, OverflowError):
        return None


def is_valid_date(value: Union[str, datetime, date, None]) -> bool:
    """Check if a value can be parsed as a date."""
    return parse_date(value) is not None


def format_date(dt: Optional[date], fmt: str = "%d-%b-%Y") -> str:
    """
    Format a date object as a string.

    Args:
        dt: Date object to format
        fmt: Output format string (default: DD-MMM-YYYY)

    Returns:
        Formatted date string, or empty string if date is None
    """
    if dt is None:
        return ""
    return dt.strftime(fmt)
