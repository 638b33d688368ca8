"""
Configuration and constants for the ledger reconciler.

This module provides:
- Sentinel values and header markers seen in the spreadsheet feed
- The default running-balance policy
- Support for user-configurable settings via environment variables
- Loading overrides from a YAML file
"""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

# =============================================================================
# Spreadsheet Artifacts
# =============================================================================

# Header cells that leak into the data when the sheet header is re-read
HEADER_MARKERS: Dict[str, str] = {
    "description": "Description",
    "sn": "S.N",
    "date": "Date",
}

# Literal placeholders the sheet emits for empty numeric cells
NAN_SENTINELS: List[str] = ["NaN"]
RATE_NAN_SENTINELS: List[str] = ["NaN", "Rs. NaN"]

# Date values that mean "no date"
MISSING_DATE_MARKERS: List[str] = ["", "-"]

# Shown for absent display fields (transaction type, payment method, ...)
DISPLAY_PLACEHOLDER: str = "-"

OPENING_BALANCE_MARKER: str = "opening balance"

# =============================================================================
# Money Parsing
# =============================================================================

# Currency prefixes removed before the numeric strip
CURRENCY_PREFIXES: List[str] = [
    r'Rs\.?',
    r'PKR',
    r'INR',
    r'USD',
    r'₹',
    r'\$',
    r'€',
    r'£',
]

# =============================================================================
# Transaction Types
# =============================================================================

TRANSACTION_TYPES: List[str] = [
    "Sale",
    "Payment Received - Cash",
    "Payment Received - Bank",
    "Payment Given - Cash",
    "Payment Given - Bank",
]

TRANSACTION_TYPE_SYNONYMS: Dict[str, str] = {
    "Sale/Purchase": "Sale",
}

PAYMENT_METHODS: List[str] = ["Cash", "Cheque", "Bank Transfer", "Jazzcash"]

# =============================================================================
# Entry Amount Calculation
# =============================================================================

ITEMS: List[str] = [
    "Chilled Gots", "Chilled Scrape", "Guides", "Chilled Rolls",
    "Fire Bricks", "H Oil", "Magnese", "Chrome",
    "Black Scrape", "White Scrape", "Toka Scrape", "Pig Scrape",
]

# Scrap is weighed in kg but priced per maund
SCRAP_ITEMS: List[str] = ["Black Scrape", "White Scrape", "Toka Scrape", "Pig Scrape"]
SCRAP_WEIGHT_DIVISOR: float = 37.324

# =============================================================================
# Date Formats
# =============================================================================

DATE_FORMATS: List[str] = [
    "%Y-%m-%d",      # YYYY-MM-DD (what the entry form submits)
    "%d/%m/%Y",      # DD/MM/YYYY
    "%d-%m-%Y",      # DD-MM-YYYY
    "%d/%m/%y",      # DD/MM/YY
    "%d %b %Y",      # DD MMM YYYY
    "%d-%b-%Y",      # DD-MMM-YYYY
    "%d %B %Y",      # DD Month YYYY
]

# =============================================================================
# Input Files
# =============================================================================

FILE_ENCODINGS: List[str] = [
    "utf-8-sig",
    "utf-8",
    "cp1252",
    "iso-8859-1",
]

# Sheet header text -> raw row key
COLUMN_ALIASES: Dict[str, str] = {
    "s.n": "sn",
    "sn": "sn",
    "s.no": "sn",
    "date": "date",
    "description": "description",
    "item": "item",
    "weight/qty": "weightQty",
    "weight / qty": "weightQty",
    "weightqty": "weightQty",
    "weight": "weightQty",
    "rate": "rate",
    "transaction type": "transactionType",
    "transactiontype": "transactionType",
    "payment method": "paymentMethod",
    "paymentmethod": "paymentMethod",
    "bank name": "bankName",
    "bankname": "bankName",
    "cheque no": "chequeNo",
    "cheque no.": "chequeNo",
    "chequeno": "chequeNo",
    "debit": "debit",
    "credit": "credit",
    "balance": "balance",
}

# =============================================================================
# Export
# =============================================================================

EXPORT_FIELDS: List[str] = [
    "sn",
    "date",
    "description",
    "item",
    "weightQty",
    "rate",
    "transactionType",
    "paymentMethod",
    "bankName",
    "chequeNo",
    "debit",
    "credit",
    "calculatedBalance",
    "calculatedDrCr",
]

# =============================================================================
# Application Info
# =============================================================================

APP_NAME: str = "ERP Ledger Reconciler"
APP_VERSION: str = "1.0.0"

DEFAULT_BALANCE_POLICY_NAME: str = os.environ.get("LEDGER_BALANCE_POLICY", "debit").lower()
DEFAULT_STRICT_FILTER: bool = os.environ.get("LEDGER_STRICT_FILTER", "true").lower() == "true"
LOG_LEVEL: str = os.environ.get("LEDGER_LOG_LEVEL", "INFO").upper()


# =============================================================================
# Flexible Configuration System
# =============================================================================

class Config:
    """
    Configuration manager that supports:
    - Environment variables
    - A YAML override file
    - Runtime overrides
    """

    _instance: Optional["Config"] = None
    _settings: Dict[str, Any] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_defaults()
            cls._instance._load_custom_config()
        return cls._instance

    def _load_defaults(self) -> None:
        """Load default settings."""
        self._settings = {
            "balance_policy": os.environ.get("LEDGER_BALANCE_POLICY", DEFAULT_BALANCE_POLICY_NAME).lower(),
            "strict_filter": os.environ.get(
                "LEDGER_STRICT_FILTER", "true" if DEFAULT_STRICT_FILTER else "false"
            ).lower() == "true",
            "transaction_type_synonyms": dict(TRANSACTION_TYPE_SYNONYMS),
            "supported_encodings": FILE_ENCODINGS,
        }

    def _load_custom_config(self) -> None:
        """Load overrides from a YAML file if one is present."""
        config_paths = [
            Path.cwd() / "ledger_config.yaml",
            Path.cwd() / "ledger_config.yml",
            Path(__file__).parent / "ledger_config.yaml",
            Path.home() / ".erp_ledger" / "config.yaml",
        ]

        for config_path in config_paths:
            if config_path.exists():
                try:
                    with open(config_path, 'r', encoding='utf-8') as f:
                        custom_config = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    logger.warning("Could not load config from %s: %s", config_path, e)
                    continue
                self._apply(custom_config)
                logger.info("Loaded config from %s", config_path)
                break

    def _apply(self, custom_config: Dict[str, Any]) -> None:
        # Synonym tables extend rather than replace the defaults
        synonyms = custom_config.pop("transaction_type_synonyms", None) or {}
        self._settings["transaction_type_synonyms"].update(synonyms)
        if "balance_policy" in custom_config:
            custom_config["balance_policy"] = str(custom_config["balance_policy"]).lower()
        self._settings.update(custom_config)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        return self._settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value at runtime."""
        self._settings[key] = value

    @property
    def balance_policy_name(self) -> str:
        return self._settings.get("balance_policy", "debit")

    @property
    def strict_filter(self) -> bool:
        return bool(self._settings.get("strict_filter", True))

    @property
    def transaction_type_synonyms(self) -> Dict[str, str]:
        return self._settings.get("transaction_type_synonyms", TRANSACTION_TYPE_SYNONYMS)

    def reload(self) -> None:
        """Reload configuration from the environment and files."""
        self._load_defaults()
        self._load_custom_config()


def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
