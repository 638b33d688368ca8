"""
Normalizer module for parsing money, dates and raw sheet rows.
"""
from .date_parser import parse_date, is_valid_date
from .amount_parser import parse_money, has_valid_amount
from .field_normalizer import normalize_row, normalize_rows

__all__ = [
    'parse_date', 'is_valid_date', 'parse_money', 'has_valid_amount',
    'normalize_row', 'normalize_rows',
]
