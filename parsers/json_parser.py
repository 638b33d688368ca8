"""
JSON loader for saved sheet API responses.
"""
import json
import logging
from typing import Any, List, Optional

from parsers.base_parser import BaseParser, LedgerLoadError, RawRow

logger = logging.getLogger(__name__)


class JSONRowParser(BaseParser):
    """
    Loads rows from a saved "getCustomerTransactions" response.

    Accepts either a bare list of rows or the API envelope
    ``{"success": true, "transactions": [...]}``.
    """

    def __init__(self, filepath: str):
        super().__init__(filepath)
        self.customer_name: Optional[str] = None

    def parse(self) -> List[RawRow]:
        self._check_exists()

        try:
            with open(self.filepath, 'r', encoding='utf-8-sig') as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise LedgerLoadError(f"Could not read JSON from {self.filepath}: {e}") from e

        self._rows = self.rows_from_payload(payload)
        logger.info("Loaded %d rows from %s", len(self._rows), self.filepath)
        return self._rows

    def rows_from_payload(self, payload: Any) -> List[RawRow]:
        """
        Extract raw rows from a decoded response body.

        Raises:
            LedgerLoadError: If the envelope reports failure or holds no rows
        """
        if isinstance(payload, list):
            return [row for row in payload if isinstance(row, dict)]

        if not isinstance(payload, dict):
            raise LedgerLoadError("Expected a list of rows or a response object")

        if payload.get('success') is False:
            raise LedgerLoadError(payload.get('error') or "Response reported failure")

        self.customer_name = payload.get('customerName') or self.customer_name
        transactions = payload.get('transactions')
        if not isinstance(transactions, list):
            raise LedgerLoadError("Response has no 'transactions' list")

        return [row for row in transactions if isinstance(row, dict)]
