"""
Coerces raw sheet rows into Transaction objects.

Every function here is total: malformed values fall back to a default
(0.0, "", "-" or the row's position) instead of raising.
"""
import logging
import math
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional

from config import (
    DISPLAY_PLACEHOLDER,
    NAN_SENTINELS,
    RATE_NAN_SENTINELS,
    get_config,
)
from models import Transaction
from normalizer.amount_parser import parse_money

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> Optional[str]:
    """Render a cell as text, or None when the cell is empty."""
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            return str(int(value))
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    try:
        return str(value)
    except ValueError:
        # int longer than the interpreter will render
        return None


def clean_text(value: Any, default: str = "", sentinels: Iterable[str] = NAN_SENTINELS) -> str:
    """
    Trim a text cell and blank out spreadsheet placeholders.

    Args:
        value: Raw cell value
        default: Returned when the cell is absent or blank after cleaning
        sentinels: Literal placeholder strings that mean "no value"

    Returns:
        Cleaned text
    """
    text = _as_text(value)
    if text is None:
        return default

    text = text.strip()
    if text in sentinels:
        text = ""

    return text or default


def parse_sn(value: Any, index: int) -> int:
    """
    Parse the serial number column.

    Args:
        value: Raw S.N cell
        index: 0-based position of the row among the surviving rows

    Returns:
        The integer part of a positive numeric value, else index + 1
    """
    fallback = index + 1

    if value is None or isinstance(value, bool):
        return fallback

    try:
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            number = float(str(value).strip())
    except (ValueError, OverflowError):
        return fallback

    if not math.isfinite(number) or int(number) < 1:
        return fallback

    return int(number)


def canonical_transaction_type(value: Any, synonyms: Optional[Mapping[str, str]] = None) -> str:
    """Map a transaction type onto its canonical name ("Sale/Purchase" -> "Sale")."""
    if synonyms is None:
        synonyms = get_config().transaction_type_synonyms
    text = clean_text(value, DISPLAY_PLACEHOLDER)
    return synonyms.get(text, text)


def normalize_row(
    row: Mapping[str, Any],
    index: int,
    synonyms: Optional[Mapping[str, str]] = None,
) -> Transaction:
    """
    Build a Transaction from one raw row.

    Args:
        row: Raw row as returned by the sheet API
        index: 0-based position among the rows that survived filtering
        synonyms: Transaction type synonym table (defaults to config)

    Returns:
        A Transaction with its running balance fields still at defaults
    """
    return Transaction(
        sn=parse_sn(row.get('sn'), index),
        date=clean_text(row.get('date'), sentinels=()),
        description=clean_text(row.get('description')),
        item=clean_text(row.get('item')),
        weight_qty=clean_text(row.get('weightQty')),
        rate=clean_text(row.get('rate'), sentinels=RATE_NAN_SENTINELS),
        transaction_type=canonical_transaction_type(row.get('transactionType'), synonyms),
        payment_method=clean_text(row.get('paymentMethod'), DISPLAY_PLACEHOLDER),
        bank_name=clean_text(row.get('bankName'), DISPLAY_PLACEHOLDER),
        cheque_no=clean_text(row.get('chequeNo'), DISPLAY_PLACEHOLDER),
        debit=abs(parse_money(row.get('debit'))),
        credit=abs(parse_money(row.get('credit'))),
        balance=parse_money(row.get('balance')),
    )


def normalize_rows(
    rows: Iterable[Mapping[str, Any]],
    synonyms: Optional[Mapping[str, str]] = None,
) -> List[Transaction]:
    """Normalize already-filtered rows, numbering them from 1."""
    if synonyms is None:
        synonyms = get_config().transaction_type_synonyms

    transactions = [normalize_row(row, index, synonyms) for index, row in enumerate(rows)]
    logger.debug("Normalized %d rows", len(transactions))
    return transactions

