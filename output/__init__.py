"""Output writers for reconciled ledgers."""
