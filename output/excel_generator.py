"""
Excel output generator for a reconciled customer ledger.

Creates a formatted Excel workbook with two sheets:
1. Ledger
2. Summary
"""
import logging
from typing import List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from models import CR, CustomerSummary, DR, Transaction
from normalizer.date_parser import parse_date
from reconciler.ledger_reconciler import BalanceMismatch

logger = logging.getLogger(__name__)


# Style definitions
HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
DR_FILL = PatternFill(start_color="FEE2E2", end_color="FEE2E2", fill_type="solid")
CR_FILL = PatternFill(start_color="DCFCE7", end_color="DCFCE7", fill_type="solid")
MISMATCH_FILL = PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid")
ALT_ROW_FILL = PatternFill(start_color="F2F2F2", end_color="F2F2F2", fill_type="solid")
CURRENCY_FORMAT = '#,##0.00'
DATE_FORMAT = 'DD-MMM-YYYY'

LEDGER_HEADERS = [
    "S.N", "Date", "Description", "Item", "Weight/Qty", "Rate",
    "Transaction Type", "Payment Method", "Bank Name", "Cheque No",
    "Debit", "Credit", "Balance", "DR/CR",
]
LEDGER_WIDTHS = [6, 13, 40, 16, 12, 12, 24, 16, 16, 12, 15, 15, 15, 8]


def generate_ledger_excel(
    transactions: Sequence[Transaction],
    summary: CustomerSummary,
    output_path: str,
    customer_name: str = "",
    mismatches: Optional[List[BalanceMismatch]] = None,
) -> str:
    """
    Generate an Excel workbook with the reconciled ledger.

    Args:
        transactions: Reconciled transactions
        summary: The customer's totals
        output_path: Path to save the Excel file
        customer_name: Shown in the summary sheet title
        mismatches: Rows whose sheet balance disagrees with the recomputed one

    Returns:
        Path to the generated file
    """
    wb = Workbook()
    del wb[wb.active.title]

    mismatched_rows = {m.index for m in mismatches or []}
    _create_ledger_sheet(wb, transactions, mismatched_rows)
    _create_summary_sheet(wb, summary, customer_name, mismatches or [])

    wb.save(output_path)
    logger.info("Excel file saved: %s", output_path)

    return output_path


def _create_ledger_sheet(wb: Workbook, transactions: Sequence[Transaction], mismatched_rows: set) -> None:
    """Create the Ledger sheet."""
    ws = wb.create_sheet("Ledger")

    for col, header in enumerate(LEDGER_HEADERS, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal='center')

    for position, txn in enumerate(transactions):
        row_idx = position + 2
        ws.cell(row=row_idx, column=1, value=txn.sn)

        # Real date cell when the text parses, the sheet's text otherwise
        parsed = parse_date(txn.date)
        cell = ws.cell(row=row_idx, column=2, value=parsed or txn.date)
        if parsed:
            cell.number_format = DATE_FORMAT

        text_values = [
            txn.description, txn.item, txn.weight_qty, txn.rate,
            txn.transaction_type, txn.payment_method, txn.bank_name, txn.cheque_no,
        ]
        for col, value in enumerate(text_values, 3):
            ws.cell(row=row_idx, column=col, value=value)

        for col, value in ((11, txn.debit), (12, txn.credit), (13, txn.calculated_balance)):
            cell = ws.cell(row=row_idx, column=col, value=value)
            cell.number_format = CURRENCY_FORMAT

        side = ws.cell(row=row_idx, column=14, value=txn.calculated_dr_cr)
        side.alignment = Alignment(horizontal='center')
        side.fill = DR_FILL if txn.calculated_dr_cr == DR else CR_FILL

        if position in mismatched_rows:
            ws.cell(row=row_idx, column=13).fill = MISMATCH_FILL
        elif row_idx % 2 == 0:
            for col in range(1, len(LEDGER_HEADERS)):
                ws.cell(row=row_idx, column=col).fill = ALT_ROW_FILL

    for col, width in enumerate(LEDGER_WIDTHS, 1):
        ws.column_dimensions[get_column_letter(col)].width = width

    ws.auto_filter.ref = f"A1:{get_column_letter(len(LEDGER_HEADERS))}{len(transactions) + 1}"
    ws.freeze_panes = "A2"


def _create_summary_sheet(
    wb: Workbook,
    summary: CustomerSummary,
    customer_name: str,
    mismatches: List[BalanceMismatch],
) -> None:
    """Create the Summary sheet."""
    ws = wb.create_sheet("Summary")

    title = f"Ledger Summary - {customer_name}" if customer_name else "Ledger Summary"
    stats = [
        (title, None),
        ("", None),
        ("Transactions", summary.transaction_count),
        ("Total Debit", summary.total_debit),
        ("Total Credit", summary.total_credit),
        ("Net Balance", summary.net_balance),
        ("Net Side", summary.net_dr_cr),
        ("Final Balance", summary.final_balance),
        ("Final Side", summary.final_dr_cr),
    ]

    row_idx = 1
    for label, value in stats:
        cell = ws.cell(row=row_idx, column=1, value=label)
        if row_idx == 1:
            cell.font = Font(bold=True, size=12)
        if isinstance(value, float):
            cell = ws.cell(row=row_idx, column=2, value=value)
            cell.number_format = CURRENCY_FORMAT
        elif value is not None:
            cell = ws.cell(row=row_idx, column=2, value=value)
            if value in (DR, CR):
                cell.fill = DR_FILL if value == DR else CR_FILL
        row_idx += 1

    if mismatches:
        row_idx += 1
        ws.cell(row=row_idx, column=1, value="Sheet Balance Mismatches").font = Font(bold=True, size=12)
        row_idx += 1
        for col, header in enumerate(["S.N", "Sheet Balance", "Calculated", "Difference"], 1):
            cell = ws.cell(row=row_idx, column=col, value=header)
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL
        for mismatch in mismatches:
            row_idx += 1
            ws.cell(row=row_idx, column=1, value=mismatch.sn)
            for col, value in enumerate(
                (mismatch.sheet_balance, mismatch.calculated_balance, mismatch.difference), 2
            ):
                cell = ws.cell(row=row_idx, column=col, value=value)
                cell.number_format = CURRENCY_FORMAT
                cell.fill = MISMATCH_FILL

    ws.column_dimensions['A'].width = 30
    ws.column_dimensions['B'].width = 20
    ws.column_dimensions['C'].width = 15
    ws.column_dimensions['D'].width = 15
