"""
Unit tests for money, date and field normalization.
"""
import unittest
from datetime import date, datetime
from decimal import Decimal

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from normalizer.amount_parser import (
    parse_money, has_valid_amount, round_money, format_currency
)
from normalizer.date_parser import parse_date, is_valid_date, format_date
from normalizer.field_normalizer import (
    canonical_transaction_type, clean_text, normalize_row, normalize_rows, parse_sn
)


class TestMoneyParser(unittest.TestCase):
    """Tests for money parsing."""

    def test_rs_prefix_with_separators(self):
        """Test "Rs. 1,250.00" reads as 1250."""
        self.assertEqual(parse_money("Rs. 1,250.00"), 1250.0)

    def test_rs_without_dot(self):
        self.assertEqual(parse_money("Rs 500"), 500.0)

    def test_pkr_prefix(self):
        self.assertEqual(parse_money("PKR 12,000"), 12000.0)

    def test_plain_number_string(self):
        self.assertEqual(parse_money("1000.50"), 1000.50)

    def test_negative(self):
        self.assertEqual(parse_money("-750"), -750.0)

    def test_numeric_input(self):
        """Test numbers pass straight through."""
        self.assertEqual(parse_money(2500), 2500.0)
        self.assertEqual(parse_money(12.5), 12.5)

    def test_decimal_input(self):
        self.assertEqual(parse_money(Decimal("99.95")), 99.95)

    def test_trailing_junk(self):
        """Test only the leading number is read."""
        self.assertEqual(parse_money("1250.00-"), 1250.0)
        self.assertEqual(parse_money("1.2.3"), 1.2)

    def test_empty_and_none(self):
        self.assertEqual(parse_money(""), 0.0)
        self.assertEqual(parse_money("   "), 0.0)
        self.assertEqual(parse_money(None), 0.0)

    def test_placeholders(self):
        """Test spreadsheet placeholders read as zero."""
        self.assertEqual(parse_money("NaN"), 0.0)
        self.assertEqual(parse_money("Rs. NaN"), 0.0)
        self.assertEqual(parse_money("-"), 0.0)

    def test_non_finite_numbers(self):
        self.assertEqual(parse_money(float("nan")), 0.0)
        self.assertEqual(parse_money(float("inf")), 0.0)

    def test_bool_is_not_money(self):
        self.assertEqual(parse_money(True), 0.0)

    def test_int_too_large_for_float(self):
        """Test integers beyond float range read as zero."""
        self.assertEqual(parse_money(10 ** 400), 0.0)
        self.assertEqual(parse_money(-(10 ** 400)), 0.0)

    def test_has_valid_amount(self):
        self.assertTrue(has_valid_amount("Rs. 10"))
        self.assertFalse(has_valid_amount("abc"))
        self.assertFalse(has_valid_amount("0"))

    def test_round_money_drops_negative_zero(self):
        self.assertEqual(str(round_money(-0.001)), "0.0")
        self.assertEqual(round_money(0.1 + 0.2), 0.3)

    def test_format_currency(self):
        self.assertEqual(format_currency(1250), "Rs. 1,250.00")
        self.assertEqual(format_currency(1250, include_symbol=False), "1,250.00")
        self.assertEqual(format_currency(None), "")


class TestDateParser(unittest.TestCase):
    """Tests for date parsing functions."""

    def test_iso_format(self):
        self.assertEqual(parse_date("2024-01-15"), date(2024, 1, 15))

    def test_dd_mm_yyyy_slash(self):
        self.assertEqual(parse_date("15/01/2024"), date(2024, 1, 15))

    def test_iso_timestamp(self):
        """Test timestamps as the sheet API serializes them."""
        self.assertEqual(parse_date("2024-01-15T00:00:00.000Z"), date(2024, 1, 15))

    def test_datetime_input(self):
        self.assertEqual(parse_date(datetime(2024, 1, 15, 10, 30)), date(2024, 1, 15))

    def test_placeholders(self):
        self.assertIsNone(parse_date("-"))
        self.assertIsNone(parse_date(""))
        self.assertIsNone(parse_date(None))
        self.assertIsNone(parse_date("not a date"))

    def test_is_valid_date(self):
        self.assertTrue(is_valid_date("2024-01-15"))
        self.assertFalse(is_valid_date("Date"))

    def test_format_date(self):
        self.assertEqual(format_date(date(2024, 1, 15)), "15-Jan-2024")
        self.assertEqual(format_date(None), "")


class TestFieldNormalizer(unittest.TestCase):
    """Tests for coercing raw rows into transactions."""

    def test_clean_text_nan(self):
        self.assertEqual(clean_text("NaN"), "")
        self.assertEqual(clean_text("  NaN  "), "")

    def test_clean_text_default(self):
        self.assertEqual(clean_text(None, "-"), "-")
        self.assertEqual(clean_text("   ", "-"), "-")
        self.assertEqual(clean_text("NaN", "-"), "-")

    def test_clean_text_numbers(self):
        """Test numeric cells render the way the sheet shows them."""
        self.assertEqual(clean_text(250.0), "250")
        self.assertEqual(clean_text(12.5), "12.5")
        self.assertEqual(clean_text(float("nan")), "")

    def test_parse_sn_numeric(self):
        self.assertEqual(parse_sn("7", 0), 7)
        self.assertEqual(parse_sn(" 12 ", 0), 12)
        self.assertEqual(parse_sn(3.0, 0), 3)
        self.assertEqual(parse_sn("12.7", 0), 12)

    def test_parse_sn_fallback(self):
        """Test unparsable S.N falls back to position + 1."""
        self.assertEqual(parse_sn("abc", 3), 4)
        self.assertEqual(parse_sn("", 0), 1)
        self.assertEqual(parse_sn(None, 5), 6)
        self.assertEqual(parse_sn("0", 2), 3)
        self.assertEqual(parse_sn("-4", 2), 3)
        self.assertEqual(parse_sn("nan", 1), 2)
        self.assertEqual(parse_sn(True, 1), 2)

    def test_parse_sn_int_too_large(self):
        self.assertEqual(parse_sn(10 ** 400, 2), 3)

    def test_clean_text_huge_int(self):
        """Test ints too long to render do not raise."""
        self.assertEqual(clean_text(10 ** 400), "1" + "0" * 400)
        self.assertIsInstance(clean_text(10 ** 5000, "-"), str)

    def test_normalize_row_huge_numbers(self):
        txn = normalize_row({"date": "2024-01-01", "sn": 10 ** 400, "debit": 10 ** 400, "credit": "5"}, 0)
        self.assertEqual(txn.sn, 1)
        self.assertEqual(txn.debit, 0.0)
        self.assertEqual(txn.credit, 5.0)

    def test_transaction_type_synonym(self):
        self.assertEqual(canonical_transaction_type("Sale/Purchase", {"Sale/Purchase": "Sale"}), "Sale")
        self.assertEqual(canonical_transaction_type("Payment Received - Cash", {}), "Payment Received - Cash")
        self.assertEqual(canonical_transaction_type(None, {}), "-")

    def test_normalize_row_money(self):
        txn = normalize_row({'date': '2024-01-01', 'debit': 'Rs. 1,250.00', 'credit': None}, 0)
        self.assertEqual(txn.debit, 1250.0)
        self.assertEqual(txn.credit, 0.0)

    def test_normalize_row_negative_money_is_unsigned(self):
        txn = normalize_row({'date': '2024-01-01', 'debit': '-300', 'balance': '-300'}, 0)
        self.assertEqual(txn.debit, 300.0)
        self.assertEqual(txn.balance, -300.0)

    def test_normalize_row_nan_item(self):
        txn = normalize_row({'date': '2024-01-01', 'item': 'NaN', 'rate': 'Rs. NaN', 'weightQty': 'NaN'}, 0)
        self.assertEqual(txn.item, "")
        self.assertEqual(txn.rate, "")
        self.assertEqual(txn.weight_qty, "")

    def test_normalize_row_display_defaults(self):
        txn = normalize_row({'date': '2024-01-01'}, 0)
        self.assertEqual(txn.transaction_type, "-")
        self.assertEqual(txn.payment_method, "-")
        self.assertEqual(txn.bank_name, "-")
        self.assertEqual(txn.cheque_no, "-")
        self.assertEqual(txn.description, "")

    def test_normalize_row_sn_fallback(self):
        txn = normalize_row({'sn': 'abc', 'date': '2024-01-01'}, 3)
        self.assertEqual(txn.sn, 4)

    def test_normalize_row_keeps_date_text(self):
        txn = normalize_row({'date': ' 2024-01-01T19:00:00.000Z '}, 0)
        self.assertEqual(txn.date, "2024-01-01T19:00:00.000Z")

    def test_normalize_rows_numbering(self):
        rows = [{'date': '2024-01-01'}, {'date': '2024-01-02', 'sn': '9'}, {'date': '2024-01-03'}]
        self.assertEqual([t.sn for t in normalize_rows(rows, {})], [1, 9, 3])

    def test_normalize_row_synonym_from_config(self):
        txn = normalize_row({'date': '2024-01-01', 'transactionType': 'Sale/Purchase'}, 0)
        self.assertEqual(txn.transaction_type, "Sale")


if __name__ == '__main__':
    unittest.main()
