"""
Data classes shared by the reconciliation pipeline.
"""
from dataclasses import dataclass, replace
from typing import Any, Dict

DR = "DR"
CR = "CR"


@dataclass
class Transaction:
    """
    A cleaned ledger row for one customer.

    Attribute names are snake_case; ``to_dict`` emits the camelCase keys
    used by the sheet API and the CSV export.
    """
    sn: int
    date: str
    description: str = ""
    item: str = ""
    weight_qty: str = ""
    rate: str = ""
    transaction_type: str = "-"
    payment_method: str = "-"
    bank_name: str = "-"
    cheque_no: str = "-"
    debit: float = 0.0
    credit: float = 0.0
    balance: float = 0.0

    # Populated by the running balance fold
    calculated_balance: float = 0.0
    calculated_dr_cr: str = DR

    def to_dict(self) -> Dict[str, Any]:
        """Convert transaction to a camelCase dictionary."""
        return {
            'sn': self.sn,
            'date': self.date,
            'description': self.description,
            'item': self.item,
            'weightQty': self.weight_qty,
            'rate': self.rate,
            'transactionType': self.transaction_type,
            'paymentMethod': self.payment_method,
            'bankName': self.bank_name,
            'chequeNo': self.cheque_no,
            'debit': self.debit,
            'credit': self.credit,
            'balance': self.balance,
            'calculatedBalance': self.calculated_balance,
            'calculatedDrCr': self.calculated_dr_cr,
        }

    def with_balance(self, calculated_balance: float, calculated_dr_cr: str) -> 'Transaction':
        """Return a copy carrying the given running balance."""
        return replace(
            self,
            calculated_balance=calculated_balance,
            calculated_dr_cr=calculated_dr_cr,
        )


@dataclass
class CustomerSummary:
    """Totals panel for one customer's ledger."""
    total_debit: float = 0.0
    total_credit: float = 0.0
    final_balance: float = 0.0
    final_dr_cr: str = DR
    transaction_count: int = 0
    net_balance: float = 0.0
    net_dr_cr: str = DR

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalDebit': self.total_debit,
            'totalCredit': self.total_credit,
            'finalBalance': self.final_balance,
            'finalDRCR': self.final_dr_cr,
            'transactionCount': self.transaction_count,
            'netBalance': self.net_balance,
            'netDRCR': self.net_dr_cr,
        }


@dataclass
class CustomerBalance:
    """One line of the balance sheet: a customer's closing position."""
    name: str
    balance: float
    dr_cr: str = DR
    sheet_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'balance': self.balance,
            'drCr': self.dr_cr,
            'sheetName': self.sheet_name,
        }


@dataclass
class BalanceSheetSummary:
    """DR/CR overview across all customers."""
    total_dr: float = 0.0
    total_cr: float = 0.0
    net_position: float = 0.0
    status: str = "BALANCED"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalDr': self.total_dr,
            'totalCr': self.total_cr,
            'netPosition': self.net_position,
            'status': self.status,
        }
