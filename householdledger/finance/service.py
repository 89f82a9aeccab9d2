"""Mini README: Presentation-facing ledger operations.

Structure:
    * LedgerService - binds a ``TransactionStore`` to the query month and
      exposes the operations used by the web interface and the CLI.
    * CsvExport - downloadable CSV payload (filename, media type, body).
    * InvalidAmountError - raised when the amount field cannot be accepted.
    * create_ledger_service - builds a file-backed service from settings.

Presentation layers own confirmation prompts and rendering. The service
validates form input, records transactions, runs CSV import/export, and
derives summaries; it never asks the user anything.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Union

from ..configuration import DEFAULT_CATEGORY, LedgerSettings, get_settings
from ..logging_utils import get_logger
from ..storage import JsonFileKeyValueStore
from .csv_codec import CSV_MEDIA_TYPE, parse_amount, parse_csv, to_csv
from .ledger import (
    Transaction,
    TransactionIdFactory,
    TransactionStore,
    TransactionType,
    parse_iso_date,
    today_iso,
)
from .summary import MonthlySummary, filter_by_month, summarise_month, validate_month_key

LOGGER = get_logger(__name__)


class InvalidAmountError(ValueError):
    """Raised when a submitted amount is empty, non-numeric, infinite or zero."""


@dataclass(slots=True)
class CsvExport:
    """CSV download ready to hand to a presentation layer."""

    filename: str
    media_type: str
    content: str


def _read_amount(value: object) -> float:
    if isinstance(value, bool):
        raise InvalidAmountError("Amount must be a number.")
    if isinstance(value, (int, float)):
        amount: Optional[float] = float(value)
    elif isinstance(value, str):
        amount = parse_amount(value)
    else:
        amount = None
    if not amount or not math.isfinite(amount):
        raise InvalidAmountError("Amount must be a finite, non-zero number.")
    return abs(amount)


class LedgerService:
    """Operations the presentation layer calls on the ledger."""

    def __init__(
        self,
        store: TransactionStore,
        *,
        default_category: str = DEFAULT_CATEGORY,
        today: Callable[[], str] = today_iso,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self.store = store
        self.default_category = default_category
        self._today = today
        self._next_id = id_factory or TransactionIdFactory()
        self._query_month = today()[:7]

    @property
    def query_month(self) -> str:
        return self._query_month

    def set_query_month(self, month_key: str) -> str:
        """Select the month used when callers do not pass one explicitly."""

        self._query_month = validate_month_key(month_key)
        LOGGER.debug("Query month set to %s", self._query_month)
        return self._query_month

    def add_transaction(self, form_values: Mapping[str, object]) -> Transaction:
        """Validate form input and record a new transaction.

        Expected keys: ``type`` (defaults to expense), ``amount``, ``category``,
        ``memo`` and ``date``. Nothing is stored when validation fails.
        """

        amount = _read_amount(form_values.get("amount"))
        transaction_type = TransactionType.from_str(str(form_values.get("type") or "expense"))
        raw_date = form_values.get("date")
        occurred_on = parse_iso_date(raw_date) if raw_date else self._today()
        category = str(form_values.get("category") or "").strip() or self.default_category

        transaction = Transaction(
            transaction_id=self._next_id(),
            transaction_type=transaction_type.value,
            amount=amount,
            category=category,
            memo=str(form_values.get("memo") or ""),
            occurred_on=occurred_on,
        )
        return self.store.add(transaction)

    def remove_transaction(self, transaction_id: str) -> int:
        return self.store.remove(transaction_id)

    def reset_all(self) -> None:
        self.store.reset()

    def list_transactions(self) -> List[Transaction]:
        return self.store.list_transactions()

    def list_month(self, month_key: Optional[str] = None) -> List[Transaction]:
        """Transactions of a month in display order (newest recorded first)."""

        month = validate_month_key(month_key) if month_key else self._query_month
        return filter_by_month(self.store.list_transactions(), month)

    def get_summary(self, month_key: Optional[str] = None) -> MonthlySummary:
        month = validate_month_key(month_key) if month_key else self._query_month
        return summarise_month(self.store.list_transactions(), month)

    def export_csv(self) -> CsvExport:
        """Serialise the whole ledger for download."""

        content = to_csv(self.store.list_transactions())
        export = CsvExport(
            filename=f"ledger_{self._today()}.csv",
            media_type=CSV_MEDIA_TYPE,
            content=content,
        )
        LOGGER.info("Exported %s transaction(s) as %s", len(self.store), export.filename)
        return export

    def import_csv(self, file_contents: Union[str, bytes]) -> List[Transaction]:
        """Parse CSV text (or UTF-8 bytes) and prepend its rows to the ledger.

        Raises ``InvalidCsvError`` before touching the store when the file has
        no data rows. Undecodable bytes raise ``UnicodeDecodeError``.
        """

        if isinstance(file_contents, bytes):
            text = file_contents.decode("utf-8-sig")
        else:
            text = file_contents.lstrip("\ufeff")
        rows = parse_csv(text, default_category=self.default_category, today=self._today)
        degraded = sum(1 for row in rows if row.defaulted)
        if degraded:
            LOGGER.info("%s of %s imported row(s) used default values", degraded, len(rows))
        return self.store.import_batch(row.transaction for row in rows)


def create_ledger_service(settings: Optional[LedgerSettings] = None) -> LedgerService:
    """Build a service over the file-backed slot configured in ``settings``."""

    settings = settings or get_settings()
    backend = JsonFileKeyValueStore(settings.data_directory)
    store = TransactionStore(backend, key=settings.storage_key)
    store.load()
    return LedgerService(store, default_category=settings.default_category)
