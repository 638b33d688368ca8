"""
Sign conventions for the running balance.

Earlier versions of the ledger screen disagreed on whether a debit raises
or lowers the running total. The convention is a single named policy here
so every caller folds the same way.
"""
from dataclasses import dataclass
from typing import Optional

from config import get_config
from models import CR, DR


@dataclass(frozen=True)
class BalancePolicy:
    """
    How debits and credits move the running total and which side a
    non-negative total is labelled.
    """
    name: str
    debit_increases: bool

    @property
    def positive_side(self) -> str:
        return DR if self.debit_increases else CR

    @property
    def negative_side(self) -> str:
        return CR if self.debit_increases else DR

    def movement(self, debit: float, credit: float) -> float:
        """Signed change a row applies to the running total."""
        return debit - credit if self.debit_increases else credit - debit

    def side(self, running_total: float) -> str:
        """DR/CR label for a running total; zero sits on the positive side."""
        return self.positive_side if running_total >= 0 else self.negative_side


# Debit raises what the customer owes; a non-negative total reads DR.
DEBIT_POSITIVE = BalancePolicy(name="debit", debit_increases=True)

# Credit raises the total; a non-negative total reads CR.
CREDIT_POSITIVE = BalancePolicy(name="credit", debit_increases=False)

POLICIES = {
    DEBIT_POSITIVE.name: DEBIT_POSITIVE,
    CREDIT_POSITIVE.name: CREDIT_POSITIVE,
}

DEFAULT_BALANCE_POLICY = DEBIT_POSITIVE


def get_policy(name: Optional[str] = None) -> BalancePolicy:
    """
    Look up a policy by name.

    Args:
        name: "debit" or "credit"; None reads the configured default

    Returns:
        The matching BalancePolicy

    Raises:
        ValueError: If the name is not a known policy
    """
    if name is None:
        name = get_config().balance_policy_name
        if name not in POLICIES:
            return DEFAULT_BALANCE_POLICY

    try:
        return POLICIES[name.lower()]
    except (KeyError, AttributeError):
        raise ValueError(
            f"Unknown balance policy: {name!r} (expected one of {', '.join(POLICIES)})"
        ) from None
