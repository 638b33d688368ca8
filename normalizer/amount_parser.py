"""
Amount parser for currency-formatted spreadsheet cells.
"""
import math
import re
from decimal import Decimal
from typing import Optional, Union

from config import CURRENCY_PREFIXES

Amount = Union[str, int, float, Decimal, None]

_NON_NUMERIC = re.compile(r'[^\d.\-]')
_NUMBER_PREFIX = re.compile(r'^-?(?:\d+\.?\d*|\.\d+)')


def parse_money(value: Amount) -> float:
    """
    Parse a money cell into a float.

    Handles:
    - Currency prefixes: Rs., Rs, PKR, INR, ₹, $
    - Thousands separators: "1,250.00"
    - Trailing junk after the number: "1250.00-" reads as 1250.0

    Args:
        value: Raw cell value (string, number or None)

    Returns:
        The parsed amount, or 0.0 if nothing numeric can be read
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        try:
            amount = float(value)
        except OverflowError:
            return 0.0
        return amount if math.isfinite(amount) else 0.0

    value_str = _remove_currency_symbols(str(value).strip())
    value_str = _NON_NUMERIC.sub('', value_str)

    match = _NUMBER_PREFIX.match(value_str)
    if not match:
        return 0.0

    try:
        amount = float(match.group(0))
    except ValueError:
        return 0.0

    return amount if math.isfinite(amount) else 0.0


def _remove_currency_symbols(value_str: str) -> str:
    """
    Remove currency symbols and prefixes from a string.

    Runs before the numeric strip so the dot in "Rs." is not read as a
    decimal point.
    """
    for prefix in CURRENCY_PREFIXES:
        value_str = re.sub(prefix + r'\s*', '', value_str, flags=re.IGNORECASE)
    return value_str


def has_valid_amount(value: Amount) -> bool:
    """
    Check if a value contains a parseable, non-zero amount.

    Args:
        value: A value to check

    Returns:
        True if the value parses to a non-zero number
    """
    return parse_money(value) != 0.0


def round_money(amount: float) -> float:
    """Round to paisa precision and drop negative zero."""
    rounded = round(amount, 2)
    return rounded + 0.0 if rounded == 0 else rounded


def format_currency(amount: Optional[float], include_symbol: bool = True) -> str:
    """
    Format an amount the way the ledger screen shows it.

    Args:
        amount: The amount to format
        include_symbol: Whether to prefix "Rs."

    Returns:
        Formatted currency string, e.g. "Rs. 1,250.00"
    """
    if amount is None:
        return ""

    result = f"{amount:,.2f}"
    if include_symbol:
        result = "Rs. " + result
    return result
