"""Mini README: Ledger core for the household ledger.

This package groups the transaction model and store (``ledger``), the CSV
codec (``csv_codec``), the monthly summary engine (``summary``) and the
presentation-facing ``LedgerService`` (``service``).
"""

from .csv_codec import InvalidCsvError, ParsedRow, from_csv, parse_csv, parse_row, to_csv
from .ledger import (
    DEFAULT_CATEGORIES,
    Transaction,
    TransactionIdFactory,
    TransactionStore,
    TransactionType,
)
from .service import CsvExport, InvalidAmountError, LedgerService, create_ledger_service
from .summary import (
    MonthlySummary,
    category_net,
    filter_by_month,
    summarise_month,
    total_expense,
    total_income,
    validate_month_key,
)

__all__ = [
    "DEFAULT_CATEGORIES",
    "CsvExport",
    "InvalidAmountError",
    "InvalidCsvError",
    "LedgerService",
    "MonthlySummary",
    "ParsedRow",
    "Transaction",
    "TransactionIdFactory",
    "TransactionStore",
    "TransactionType",
    "category_net",
    "create_ledger_service",
    "filter_by_month",
    "from_csv",
    "parse_csv",
    "parse_row",
    "summarise_month",
    "to_csv",
    "total_expense",
    "total_income",
    "validate_month_key",
]
