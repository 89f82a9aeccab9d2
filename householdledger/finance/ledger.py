"""Mini README: Transaction model and the persisted transaction store.

Structure:
    * TransactionType - enum representing income versus expense entries.
    * Transaction - dataclass storing one ledger entry and its JSON helpers.
    * TransactionIdFactory - millisecond identifiers that never repeat in-process.
    * TransactionStore - ordered collection mirrored to a key-value slot.

The store keeps the newest entries first. Every mutation rewrites the whole
collection into the slot as a JSON array, mirroring how the browser version
of the ledger kept ``localStorage`` in sync. Identifiers are unique by
convention only: imports may bring duplicates and the store accepts them.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Dict, Iterable, List, Mapping

from ..configuration import DEFAULT_CATEGORY, DEFAULT_STORAGE_KEY
from ..logging_utils import get_logger
from ..storage import KeyValueStore

LOGGER = get_logger(__name__)

DEFAULT_CATEGORIES = (
    "식비",
    "교통",
    "주거/관리비",
    "공과금",
    "용돈/생활비",
    "쇼핑",
    "의료/보험",
    "기타",
)


class TransactionType(str, Enum):
    """Enumerate the two kinds of ledger entry."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: str) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported transaction type: {value}") from error


def today_iso() -> str:
    """Return the current date as ``YYYY-MM-DD``."""

    return date.today().isoformat()


def parse_iso_date(value: object) -> str:
    """Normalise ISO strings or date objects into ``YYYY-MM-DD`` strings."""

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()).isoformat()
        except ValueError as error:
            raise ValueError(f"Dates must use the YYYY-MM-DD format: {value!r}") from error
    raise ValueError("Dates must be provided as ISO strings or date/datetime instances.")


@dataclass(slots=True)
class Transaction:
    """Represent a single income or expense entry.

    ``transaction_type`` is kept as a plain string because imported rows are
    stored verbatim; entries recorded through the form always hold one of the
    ``TransactionType`` values, which compare equal to their strings.
    """

    transaction_id: str
    transaction_type: str
    amount: float
    category: str = DEFAULT_CATEGORY
    memo: str = ""
    occurred_on: str = ""

    @property
    def month_key(self) -> str:
        """The ``YYYY-MM`` prefix used for monthly filtering."""

        return self.occurred_on[:7]

    @property
    def is_income(self) -> bool:
        """True for entries recorded as income."""

        return self.transaction_type == TransactionType.INCOME.value

    @property
    def is_expense(self) -> bool:
        """True for entries recorded as expenses."""

        return self.transaction_type == TransactionType.EXPENSE.value

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction using the persisted record keys."""

        return {
            "id": self.transaction_id,
            "type": self.transaction_type,
            "amount": self.amount,
            "category": self.category,
            "memo": self.memo,
            "date": self.occurred_on,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "Transaction":
        """Rebuild a transaction from a persisted record.

        Raises ``ValueError`` or ``TypeError`` when the record cannot be read.
        """

        amount = payload.get("amount", 0)
        if isinstance(amount, bool) or not isinstance(amount, (int, float, str)):
            raise TypeError(f"Unsupported amount value: {amount!r}")
        category = payload.get("category")
        return cls(
            transaction_id=str(payload.get("id", "")),
            transaction_type=str(payload.get("type", "")),
            amount=float(amount or 0),
            category=DEFAULT_CATEGORY if category is None else str(category),
            memo=str(payload.get("memo") or ""),
            occurred_on=str(payload.get("date") or ""),
        )


class TransactionIdFactory:
    """Generate millisecond timestamp identifiers, bumping on collisions."""

    def __init__(self) -> None:
        self._last = 0

    def __call__(self) -> str:
        candidate = time.time_ns() // 1_000_000
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return str(candidate)


class TransactionStore:
    """Ordered transaction collection mirrored to a key-value slot."""

    def __init__(self, backend: KeyValueStore, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._backend = backend
        self._key = key
        self._transactions: List[Transaction] = []

    def __len__(self) -> int:
        return len(self._transactions)

    def load(self) -> List[Transaction]:
        """Read the persisted slot, falling back to an empty collection."""

        self._transactions = self._read_slot()
        LOGGER.debug(
            "Loaded %s transactions from %s slot '%s'",
            len(self._transactions),
            self._backend.backend_name,
            self._key,
        )
        return self.list_transactions()

    def _read_slot(self) -> List[Transaction]:
        raw = self._backend.get(self._key)
        if not raw:
            return []
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            LOGGER.warning("Slot '%s' does not hold valid JSON; starting empty", self._key)
            return []
        if not isinstance(payload, list) or not all(isinstance(entry, dict) for entry in payload):
            LOGGER.warning("Slot '%s' does not hold a list of records; starting empty", self._key)
            return []
        try:
            return [Transaction.from_dict(entry) for entry in payload]
        except (TypeError, ValueError) as error:
            LOGGER.warning("Slot '%s' holds unreadable records (%s); starting empty", self._key, error)
            return []

    def _commit(self, transactions: List[Transaction]) -> None:
        """Write ``transactions`` to the slot, then adopt them in memory.

        A failed write leaves the in-memory collection untouched.
        """

        encoded = json.dumps(
            [transaction.as_dict() for transaction in transactions],
            ensure_ascii=False,
        )
        self._backend.set(self._key, encoded)
        self._transactions = transactions

    def list_transactions(self) -> List[Transaction]:
        """Return transactions in stored order, newest first."""

        return list(self._transactions)

    def add(self, transaction: Transaction) -> Transaction:
        """Prepend a transaction and persist the whole collection."""

        self._commit([transaction] + self._transactions)
        LOGGER.info(
            "Recorded %s %s in '%s' (id=%s)",
            transaction.transaction_type,
            transaction.amount,
            transaction.category,
            transaction.transaction_id,
        )
        return transaction

    def remove(self, transaction_id: str) -> int:
        """Drop every entry carrying ``transaction_id`` and return how many went."""

        remaining = [
            transaction
            for transaction in self._transactions
            if transaction.transaction_id != transaction_id
        ]
        removed = len(self._transactions) - len(remaining)
        self._commit(remaining)
        LOGGER.info("Removed %s transaction(s) with id=%s", removed, transaction_id)
        return removed

    def reset(self) -> None:
        """Empty the collection and erase the persisted slot."""

        self._backend.delete(self._key)
        self._transactions = []
        LOGGER.info("Ledger reset; slot '%s' cleared", self._key)

    def import_batch(self, records: Iterable[Transaction]) -> List[Transaction]:
        """Prepend ``records`` in the order received and persist."""

        batch = list(records)
        self._commit(batch + self._transactions)
        LOGGER.info("Imported %s transaction(s); ledger now holds %s", len(batch), len(self._transactions))
        return batch
