#!/usr/bin/env python3
"""
Generate sample XLSX and CSV ledger downloads from sample_ledger.json.

Both files carry a title line above the header, the way a downloaded
customer tab does, and keep the JSON's artifact rows (repeated header,
"-" date, NaN placeholders).
"""
import json
import os

import pandas as pd

SAMPLE_DIR = os.path.dirname(os.path.abspath(__file__))
SAMPLE_JSON = os.path.join(SAMPLE_DIR, 'sample_ledger.json')

# API field name -> column header in the customer tab
SHEET_HEADERS = {
    'sn': 'S.N',
    'date': 'Date',
    'description': 'Description',
    'item': 'Item',
    'weightQty': 'Weight/Qty',
    'rate': 'Rate',
    'transactionType': 'Transaction Type',
    'paymentMethod': 'Payment Method',
    'bankName': 'Bank Name',
    'chequeNo': 'Cheque No',
    'debit': 'Debit',
    'credit': 'Credit',
    'balance': 'Balance',
}


def load_sample_payload():
    """Read the saved API response the other samples are built from."""
    with open(SAMPLE_JSON, 'r', encoding='utf-8') as f:
        return json.load(f)


def _sample_frame(payload):
    rows = [
        {header: row.get(key, '') for key, header in SHEET_HEADERS.items()}
        for row in payload['transactions']
    ]
    return pd.DataFrame(rows, columns=list(SHEET_HEADERS.values()))


def create_sample_xlsx(output_path=None):
    """Create an Excel download of the sample customer's tab."""
    payload = load_sample_payload()
    output_path = output_path or os.path.join(SAMPLE_DIR, 'sample_ledger.xlsx')
    sheet_name = payload['customerName']

    with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
        # Title block above the ledger table
        info_df = pd.DataFrame({'A': [f"Customer Ledger - {sheet_name}", 'ERP Ledger']})
        info_df.to_excel(writer, sheet_name=sheet_name, index=False, header=False)

        _sample_frame(payload).to_excel(writer, sheet_name=sheet_name, index=False, startrow=3)

    print(f"Created: {output_path}")
    return output_path


def create_sample_csv(output_path=None):
    """Create a CSV download of the sample customer's tab."""
    payload = load_sample_payload()
    output_path = output_path or os.path.join(SAMPLE_DIR, 'sample_ledger.csv')

    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        f.write(f"Customer Ledger - {payload['customerName']}\n")
        _sample_frame(payload).to_csv(f, index=False)

    print(f"Created: {output_path}")
    return output_path


if __name__ == '__main__':
    print("Creating sample test files...")
    create_sample_xlsx()
    create_sample_csv()
    print("Done!")
