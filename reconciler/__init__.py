"""Reconciliation module for customer ledgers."""
from reconciler.balance_policy import (
    BalancePolicy,
    CREDIT_POSITIVE,
    DEBIT_POSITIVE,
    DEFAULT_BALANCE_POLICY,
    get_policy,
)
from reconciler.ledger_reconciler import LedgerReconciler, reconcile
from reconciler.row_filter import RowFilter

__all__ = [
    "BalancePolicy",
    "CREDIT_POSITIVE",
    "DEBIT_POSITIVE",
    "DEFAULT_BALANCE_POLICY",
    "get_policy",
    "LedgerReconciler",
    "reconcile",
    "RowFilter",
]
