#!/usr/bin/env python3
"""
ERP Ledger Reconciler - Main Entry Point

Reads a saved customer ledger (the JSON returned by the sheet API, or a
CSV/XLSX download of the customer's tab), recomputes the running balance
and DR/CR side of every row, and writes the cleaned ledger to CSV or Excel.

Usage:
    python main.py --input <filepath> [--output <ledger.csv|ledger.xlsx>] [options]

Examples:
    python main.py --input ali_traders.json --output ali_traders.xlsx
    python main.py --input ledger.csv --output cleaned.csv --policy credit
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config import APP_NAME, LOG_LEVEL, get_config
from normalizer.amount_parser import format_currency
from normalizer.date_parser import format_date, parse_date
from output.csv_exporter import export_csv
from output.excel_generator import generate_ledger_excel
from parsers import JSONRowParser, LedgerLoadError, detect_file_type, get_parser
from reconciler.balance_policy import POLICIES, get_policy
from reconciler.ledger_reconciler import LedgerReconciler, find_balance_mismatches
from reconciler.row_filter import RowFilter


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Rebuild a customer's ledger with running balances.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --input ali_traders.json --output ali_traders.xlsx
  python main.py --input ledger.csv --output cleaned.csv --policy credit
  python main.py --input ledger.xlsx --sheet "Ali Traders" --lenient

Environment Variables:
  LEDGER_BALANCE_POLICY  - debit or credit (default: debit)
  LEDGER_STRICT_FILTER   - drop rows with NaN placeholders (default: true)
        """
    )

    parser.add_argument(
        '--input', '-i',
        required=True,
        help='Saved ledger to read (JSON, CSV or XLSX)'
    )
    parser.add_argument(
        '--output', '-o',
        default=None,
        help='Where to write the cleaned ledger (.csv or .xlsx)'
    )
    parser.add_argument(
        '--type', '-t',
        choices=['json', 'csv', 'xlsx'],
        default=None,
        help='Input type (auto-detected by extension if not specified)'
    )
    parser.add_argument(
        '--sheet',
        default=None,
        help='Customer tab to read (for XLSX, defaults to first sheet)'
    )
    parser.add_argument(
        '--customer', '-c',
        default=None,
        help='Customer name for the report title'
    )
    parser.add_argument(
        '--policy',
        choices=sorted(POLICIES),
        default=None,
        help='Running balance convention (default: from config)'
    )
    parser.add_argument(
        '--lenient',
        action='store_true',
        help='Keep rows whose item, weight or rate is a NaN placeholder'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, LOG_LEVEL, logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        file_type = args.type or detect_file_type(args.input)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    output_type = None
    if args.output:
        output_type = Path(args.output).suffix.lower()
        if output_type not in ('.csv', '.xlsx'):
            print(f"Error: Output must be a .csv or .xlsx file, got: {args.output}")
            return 1

    policy = get_policy(args.policy)
    strict = False if args.lenient else get_config().strict_filter

    print(f"\n{'='*60}")
    print(APP_NAME)
    print(f"{'='*60}")
    print(f"Input file: {args.input}")
    print(f"File type: {file_type}")
    print(f"Balance policy: {policy.name} (non-negative total is {policy.positive_side})")
    print(f"Strict filter: {'yes' if strict else 'no'}")
    print(f"{'='*60}\n")

    parser = get_parser(args.input, file_type, sheet_name=args.sheet)
    try:
        rows = parser.parse()
    except LedgerLoadError as e:
        print(f"Error: {e}")
        return 1

    customer = args.customer
    if customer is None and isinstance(parser, JSONRowParser):
        customer = parser.customer_name
    customer = customer or Path(args.input).stem

    reconciler = LedgerReconciler(policy=policy, row_filter=RowFilter(strict=strict))
    transactions, summary = reconciler.reconcile(rows)
    mismatches = find_balance_mismatches(transactions)

    print(f"--- Ledger Summary: {customer} ---")
    print(f"Rows read: {len(rows)}")
    print(f"Valid transactions: {summary.transaction_count}")
    dates = [d for d in (parse_date(t.date) for t in transactions) if d is not None]
    if dates:
        print(f"Period: {format_date(min(dates))} to {format_date(max(dates))}")
    print(f"Total debit: {format_currency(summary.total_debit)}")
    print(f"Total credit: {format_currency(summary.total_credit)}")
    print(f"Net balance: {format_currency(summary.net_balance)} {summary.net_dr_cr}")
    print(f"Final balance: {format_currency(summary.final_balance)} {summary.final_dr_cr}")

    if mismatches:
        print(f"\nSheet balance disagrees on {len(mismatches)} row(s):")
        for mismatch in mismatches[:10]:
            print(
                f"  - S.N {mismatch.sn}: sheet {format_currency(mismatch.sheet_balance)}, "
                f"calculated {format_currency(mismatch.calculated_balance)}"
            )
        if len(mismatches) > 10:
            print(f"  ... and {len(mismatches) - 10} more")

    if args.output:
        if output_type == '.csv':
            export_csv(transactions, args.output)
        else:
            generate_ledger_excel(
                transactions,
                summary,
                args.output,
                customer_name=customer,
                mismatches=mismatches,
            )
        print(f"\nOutput saved to: {args.output}")

    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
