#!/usr/bin/env python3
"""
ERP Ledger Reconciler - Web API

A Flask application that reconciles ledger rows posted by the dashboard
and returns them in the same envelope the sheet API uses
(``{"success": ..., ...}``).
"""
import logging
import os
from datetime import datetime

from flask import Flask, Response, jsonify, request

from config import APP_NAME, APP_VERSION, ITEMS, LOG_LEVEL, PAYMENT_METHODS, TRANSACTION_TYPES
from output.csv_exporter import transactions_to_csv
from reconciler.balance_policy import get_policy
from reconciler.balance_sheet import summarize_balance_sheet, top_customers
from reconciler.entry_builder import calculate_amount
from reconciler.ledger_reconciler import LedgerReconciler
from reconciler.row_filter import RowFilter


# =============================================================================
# Application Configuration
# =============================================================================

app = Flask(__name__)

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

MAX_CONTENT_LENGTH = 8 * 1024 * 1024  # 8 MB max request size
app.config['MAX_CONTENT_LENGTH'] = MAX_CONTENT_LENGTH


class InvalidRequest(Exception):
    """Request body is not usable; reported to the client as a 400."""


def _json_body() -> dict:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise InvalidRequest("Request body must be a JSON object")
    return payload


def _reconciler_from(payload: dict) -> LedgerReconciler:
    policy_name = payload.get('policy')
    if policy_name is not None and not isinstance(policy_name, str):
        raise InvalidRequest("'policy' must be a string")
    try:
        policy = get_policy(policy_name)
    except ValueError as e:
        raise InvalidRequest(str(e)) from e

    strict = payload.get('strict')
    if strict is not None and not isinstance(strict, bool):
        raise InvalidRequest("'strict' must be true or false")

    return LedgerReconciler(policy=policy, row_filter=RowFilter(strict=strict))


def _rows_from(payload: dict) -> list:
    rows = payload.get('transactions')
    if not isinstance(rows, list):
        raise InvalidRequest("'transactions' must be a list of rows")
    return rows


# =============================================================================
# Routes
# =============================================================================

@app.route('/api/reconcile', methods=['POST'])
def reconcile_ledger():
    """Reconcile one customer's raw rows."""
    payload = _json_body()
    reconciler = _reconciler_from(payload)
    transactions, summary = reconciler.reconcile(_rows_from(payload))

    logger.info(
        "Reconciled %s: %d transactions",
        payload.get('customerName') or 'customer', summary.transaction_count,
    )

    return jsonify({
        'success': True,
        'customerName': payload.get('customerName', ''),
        'policy': reconciler.policy.name,
        'transactions': [txn.to_dict() for txn in transactions],
        'summary': summary.to_dict(),
    })


@app.route('/api/export/csv', methods=['POST'])
def export_ledger_csv():
    """Reconcile rows and return them as a CSV download."""
    payload = _json_body()
    transactions, _ = _reconciler_from(payload).reconcile(_rows_from(payload))

    name = "".join(c for c in str(payload.get('customerName') or 'ledger') if c.isalnum() or c in '_-')
    filename = f"{name or 'ledger'}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"

    return Response(
        transactions_to_csv(transactions),
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename="{filename}"'},
    )


@app.route('/api/balance-sheet', methods=['POST'])
def balance_sheet_summary():
    """DR/CR totals over all customers' closing balances."""
    payload = _json_body()
    balances = payload.get('balances')
    if not isinstance(balances, list):
        raise InvalidRequest("'balances' must be a list")

    summary = summarize_balance_sheet(balances)
    return jsonify({
        'success': True,
        'summary': summary.to_dict(),
        'topCustomers': [b.to_dict() for b in top_customers(balances)],
    })


@app.route('/api/entries/amount', methods=['POST'])
def entry_amount():
    """Amount for a new entry from its item, weight and rate."""
    payload = _json_body()
    amount = calculate_amount(payload.get('item'), payload.get('weightQty'), payload.get('rate'))
    return jsonify({
        'success': True,
        'amount': f"{amount:.2f}" if amount is not None else "",
    })


@app.route('/api/options')
def entry_options():
    """Choices offered by the add-transaction form."""
    return jsonify({
        'items': ITEMS,
        'transactionTypes': TRANSACTION_TYPES,
        'paymentMethods': PAYMENT_METHODS,
    })


@app.route('/health')
def health_check():
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'app': APP_NAME,
        'version': APP_VERSION,
        'timestamp': datetime.now().isoformat()
    })


@app.errorhandler(InvalidRequest)
def bad_request(e):
    return jsonify({'success': False, 'error': str(e)}), 400


@app.errorhandler(413)
def payload_too_large(e):
    """Handle request body too large."""
    return jsonify({
        'success': False,
        'error': f'Request too large. Maximum size is {MAX_CONTENT_LENGTH // (1024 * 1024)} MB.'
    }), 413


@app.errorhandler(500)
def internal_error(e):
    """Handle internal server error."""
    logger.error(f"Internal server error: {e}")
    return jsonify({
        'success': False,
        'error': 'An internal error occurred. Please try again.'
    }), 500


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('FLASK_DEBUG', 'false').lower() == 'true'

    logger.info(f"Starting {APP_NAME} v{APP_VERSION} on port {port}")

    app.run(host='0.0.0.0', port=port, debug=debug)
