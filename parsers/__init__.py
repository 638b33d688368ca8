"""
Parsers module for loading raw ledger rows from saved files.
"""
from pathlib import Path
from typing import Optional

from .base_parser import BaseParser, LedgerLoadError
from .csv_parser import CSVRowParser
from .json_parser import JSONRowParser
from .xlsx_parser import XLSXRowParser


def detect_file_type(filepath: str) -> str:
    """
    Detect file type from extension.

    Returns:
        'json', 'csv' or 'xlsx'

    Raises:
        ValueError: If the extension is not recognised
    """
    ext = Path(filepath).suffix.lower()
    if ext == '.json':
        return 'json'
    elif ext in ('.csv', '.txt'):
        return 'csv'
    elif ext in ('.xlsx', '.xls'):
        return 'xlsx'
    raise ValueError(f"Unknown file extension: {ext}. Use --type to specify.")


def get_parser(filepath: str, file_type: Optional[str] = None, sheet_name: Optional[str] = None) -> BaseParser:
    """Build the loader for a file, detecting its type from the extension."""
    file_type = file_type or detect_file_type(filepath)
    if file_type == 'json':
        return JSONRowParser(filepath)
    if file_type == 'csv':
        return CSVRowParser(filepath)
    return XLSXRowParser(filepath, sheet_name=sheet_name)


__all__ = [
    'BaseParser', 'LedgerLoadError', 'CSVRowParser', 'JSONRowParser', 'XLSXRowParser',
    'detect_file_type', 'get_parser',
]
