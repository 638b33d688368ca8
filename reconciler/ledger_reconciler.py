"""
Ledger Reconciliation Module.

Turns one customer's raw transaction feed into a ledger:
1. Dropping spreadsheet artifacts (header rows, blank dates, NaN rows)
2. Normalizing each surviving row into a Transaction
3. Folding a running balance over the rows in the order given
4. Summarizing debit/credit totals and the closing position
"""
import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from config import OPENING_BALANCE_MARKER
from models import CustomerSummary, DR, CR, Transaction
from normalizer.amount_parser import round_money
from normalizer.field_normalizer import normalize_rows
from reconciler.balance_policy import BalancePolicy, get_policy
from reconciler.row_filter import RowFilter

logger = logging.getLogger(__name__)


@dataclass
class BalanceMismatch:
    """A row whose sheet balance disagrees with the recomputed one."""
    index: int  # position in the reconciled ledger; S.N may repeat
    sn: int
    sheet_balance: float
    calculated_balance: float
    difference: float


def is_opening_balance(description: str) -> bool:
    """True if the description marks a brought-forward balance."""
    return OPENING_BALANCE_MARKER in (description or "").lower()


def compute_running_balances(
    transactions: Sequence[Transaction],
    policy: Optional[BalancePolicy] = None,
) -> List[Transaction]:
    """
    Annotate transactions with a running balance and DR/CR side.

    An opening-balance first row seeds the total with its own movement, or
    with its balance column when it carries no debit or credit. Every other
    row adds its movement.

    Args:
        transactions: Normalized transactions in ledger order
        policy: Sign convention (defaults to the configured policy)

    Returns:
        New Transaction objects; the input is not modified
    """
    policy = policy or get_policy()
    running = 0.0
    annotated: List[Transaction] = []

    for index, txn in enumerate(transactions):
        movement = policy.movement(txn.debit, txn.credit)

        if index == 0 and is_opening_balance(txn.description):
            running = movement if movement != 0 else txn.balance
        else:
            running += movement

        running = round_money(running)
        annotated.append(txn.with_balance(abs(running), policy.side(running)))

    return annotated


def summarize(transactions: Sequence[Transaction]) -> CustomerSummary:
    """
    Reduce annotated transactions into the customer's totals.

    Totals do not depend on the balance policy; the final balance and side
    come from the last row's fold result.
    """
    if not transactions:
        return CustomerSummary()

    total_debit = round_money(sum(t.debit for t in transactions))
    total_credit = round_money(sum(t.credit for t in transactions))
    last = transactions[-1]

    return CustomerSummary(
        total_debit=total_debit,
        total_credit=total_credit,
        final_balance=last.calculated_balance,
        final_dr_cr=last.calculated_dr_cr,
        transaction_count=len(transactions),
        net_balance=round_money(abs(total_debit - total_credit)),
        net_dr_cr=DR if total_debit >= total_credit else CR,
    )


def find_balance_mismatches(
    transactions: Sequence[Transaction],
    tolerance: float = 0.01,
) -> List[BalanceMismatch]:
    """
    Compare the sheet's own balance column with the recomputed balance.

    Rows with an empty (zero) sheet balance are skipped. The sheet stores
    the balance unsigned, so magnitudes are compared.
    """
    mismatches = []
    for index, txn in enumerate(transactions):
        if not txn.balance:
            continue
        difference = round_money(txn.calculated_balance - abs(txn.balance))
        if abs(difference) > tolerance:
            mismatches.append(BalanceMismatch(
                index=index,
                sn=txn.sn,
                sheet_balance=abs(txn.balance),
                calculated_balance=txn.calculated_balance,
                difference=difference,
            ))
    return mismatches


class LedgerReconciler:
    """
    Rebuilds a customer's ledger from the raw sheet feed.

    Holds only configuration; every call starts from scratch, so the same
    rows always produce the same result.
    """

    def __init__(
        self,
        policy: Optional[BalancePolicy] = None,
        row_filter: Optional[RowFilter] = None,
        synonyms: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize the reconciler.

        Args:
            policy: Running balance sign convention
            row_filter: Artifact filter (defaults to the configured strictness)
            synonyms: Transaction type synonym table
        """
        self.policy = policy or get_policy()
        self.row_filter = row_filter or RowFilter()
        self.synonyms = synonyms

    def reconcile(
        self,
        rows: Optional[Iterable[Any]],
    ) -> Tuple[List[Transaction], CustomerSummary]:
        """
        Filter, normalize, fold and summarize raw rows.

        Args:
            rows: Raw rows as returned by the sheet API (may be None)

        Returns:
            Tuple of (annotated transactions, customer summary)
        """
        kept = self.row_filter.apply(rows)
        transactions = normalize_rows(kept, self.synonyms)
        transactions = compute_running_balances(transactions, self.policy)
        summary = summarize(transactions)

        logger.info(
            "Reconciled %d transactions (%s policy): %.2f %s",
            summary.transaction_count,
            self.policy.name,
            summary.final_balance,
            summary.final_dr_cr,
        )

        return transactions, summary


def reconcile(
    rows: Optional[Iterable[Any]],
    policy: Optional[BalancePolicy] = None,
    strict: Optional[bool] = None,
) -> Tuple[List[Transaction], CustomerSummary]:
    """Reconcile raw rows with a one-off LedgerReconciler."""
    reconciler = LedgerReconciler(policy=policy, row_filter=RowFilter(strict=strict))
    return reconciler.reconcile(rows)
