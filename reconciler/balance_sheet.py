"""
DR/CR overview across all customers.

Used when the sheet's own summary endpoint is unavailable: totals the
closing balances of every customer by side.
"""
from collections import abc
from typing import Any, Iterable, List, Mapping, Union

from models import BalanceSheetSummary, CR, CustomerBalance, CustomerSummary, DR
from normalizer.amount_parser import parse_money, round_money
from normalizer.field_normalizer import clean_text

NET_DR = "NET DR"
NET_CR = "NET CR"
BALANCED = "BALANCED"


def customer_balance_from_row(row: Mapping[str, Any]) -> CustomerBalance:
    """Build a CustomerBalance from a balance sheet API row."""
    dr_cr = clean_text(row.get('drCr')).upper()
    return CustomerBalance(
        name=clean_text(row.get('name')),
        balance=parse_money(row.get('balance')),
        dr_cr=dr_cr if dr_cr in (DR, CR) else "",
        sheet_name=clean_text(row.get('sheetName')),
    )


def customer_balance_from_summary(name: str, summary: CustomerSummary) -> CustomerBalance:
    """Build a CustomerBalance from a reconciled ledger's summary."""
    return CustomerBalance(name=name, balance=summary.final_balance, dr_cr=summary.final_dr_cr)


def summarize_balance_sheet(
    balances: Iterable[Union[CustomerBalance, Mapping[str, Any]]],
) -> BalanceSheetSummary:
    """
    Total customer balances by side.

    Customers without a DR/CR label are left out of both totals.

    Args:
        balances: CustomerBalance objects or raw balance sheet rows

    Returns:
        BalanceSheetSummary with NET DR / NET CR / BALANCED status
    """
    total_dr = 0.0
    total_cr = 0.0

    for entry in _as_balances(balances):
        if entry.dr_cr == DR:
            total_dr += abs(entry.balance)
        elif entry.dr_cr == CR:
            total_cr += abs(entry.balance)

    total_dr = round_money(total_dr)
    total_cr = round_money(total_cr)
    net = round_money(total_dr - total_cr)

    if net > 0:
        status = NET_DR
    elif net < 0:
        status = NET_CR
    else:
        status = BALANCED

    return BalanceSheetSummary(
        total_dr=total_dr,
        total_cr=total_cr,
        net_position=abs(net),
        status=status,
    )


def top_customers(
    balances: Iterable[Union[CustomerBalance, Mapping[str, Any]]],
    limit: int = 10,
) -> List[CustomerBalance]:
    """Largest positions first, by absolute balance."""
    ranked = sorted(_as_balances(balances), key=lambda b: abs(b.balance), reverse=True)
    return ranked[:limit]


def _as_balances(
    balances: Iterable[Union[CustomerBalance, Mapping[str, Any]]],
) -> List[CustomerBalance]:
    return [
        entry if isinstance(entry, CustomerBalance) else customer_balance_from_row(entry)
        for entry in balances or []
        if isinstance(entry, (CustomerBalance, abc.Mapping))
    ]
