"""
Helpers for new ledger entries: amount from weight and rate, and the raw
row an entry produces in the customer sheet.
"""
from typing import Any, Dict, Optional

from config import DISPLAY_PLACEHOLDER, SCRAP_ITEMS, SCRAP_WEIGHT_DIVISOR
from normalizer.amount_parser import parse_money, round_money

DEBIT = "Debit"
CREDIT = "Credit"


def calculate_amount(item: Optional[str], weight_qty: Any, rate: Any) -> Optional[float]:
    """
    Price an entry from its weight/quantity and rate.

    Scrap items are weighed in kg but priced per maund, so their weight is
    divided by SCRAP_WEIGHT_DIVISOR first.

    Args:
        item: Item name
        weight_qty: Weight or quantity cell
        rate: Rate cell

    Returns:
        The amount rounded to 2 decimals, or None if weight or rate is missing
    """
    weight = parse_money(weight_qty)
    unit_rate = parse_money(rate)

    if not weight or not unit_rate:
        return None

    if (item or "").strip() in SCRAP_ITEMS:
        amount = (weight / SCRAP_WEIGHT_DIVISOR) * unit_rate
    else:
        amount = weight * unit_rate

    return round_money(amount)


def build_entry_row(
    date: str,
    description: str,
    amount: Any,
    dr_cr: str = DEBIT,
    item: str = "",
    weight_qty: Any = "",
    rate: Any = "",
    transaction_type: str = "Sale",
    payment_method: str = "",
    bank_name: str = "",
    cheque_no: str = "",
) -> Dict[str, Any]:
    """
    Build the raw sheet row for a new entry.

    The entry form takes one amount plus a Debit/Credit choice; the sheet
    stores it in separate debit and credit columns. When no amount is given
    it is calculated from weight and rate.

    Raises:
        ValueError: If dr_cr is not "Debit" or "Credit"
    """
    side = (dr_cr or "").strip().capitalize()
    if side not in (DEBIT, CREDIT):
        raise ValueError(f"dr_cr must be {DEBIT!r} or {CREDIT!r}, got {dr_cr!r}")

    value = abs(parse_money(amount))
    if not value:
        value = calculate_amount(item, weight_qty, rate) or 0.0

    return {
        'date': date,
        'description': description,
        'item': item,
        'weightQty': weight_qty,
        'rate': rate,
        'transactionType': transaction_type,
        'paymentMethod': payment_method or DISPLAY_PLACEHOLDER,
        'bankName': bank_name or DISPLAY_PLACEHOLDER,
        'chequeNo': cheque_no or DISPLAY_PLACEHOLDER,
        'debit': value if side == DEBIT else 0,
        'credit': value if side == CREDIT else 0,
    }
