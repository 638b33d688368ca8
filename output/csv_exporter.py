"""
CSV export of a reconciled ledger.

One header row of Transaction field names, then one row per transaction.
"""
import csv
import io
import logging
from typing import List, Optional, Sequence

from config import EXPORT_FIELDS
from models import Transaction

logger = logging.getLogger(__name__)


def transactions_to_csv(
    transactions: Sequence[Transaction],
    fields: Optional[List[str]] = None,
) -> str:
    """
    Render transactions as CSV text.

    Args:
        transactions: Reconciled transactions
        fields: Columns to write (defaults to EXPORT_FIELDS)

    Returns:
        The CSV document as a string
    """
    fields = fields or EXPORT_FIELDS
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=fields, extrasaction='ignore', lineterminator='\n')
    writer.writeheader()
    for txn in transactions:
        writer.writerow(txn.to_dict())
    return buffer.getvalue()


def export_csv(
    transactions: Sequence[Transaction],
    output_path: str,
    fields: Optional[List[str]] = None,
) -> str:
    """
    Write transactions to a CSV file.

    Args:
        transactions: Reconciled transactions
        output_path: Path to save the CSV file
        fields: Columns to write (defaults to EXPORT_FIELDS)

    Returns:
        Path to the generated file
    """
    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        f.write(transactions_to_csv(transactions, fields))

    logger.info("CSV saved: %s (%d rows)", output_path, len(transactions))
    return output_path
