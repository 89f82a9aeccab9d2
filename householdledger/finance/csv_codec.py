"""Mini README: CSV export and lenient CSV import for ledger transactions.

Structure:
    * to_csv - serialise transactions using the fixed ledger header.
    * parse_row - parse one data line into a tagged ``ParsedRow``.
    * parse_csv / from_csv - parse a whole file, rejecting files without data.
    * InvalidCsvError - raised when a file cannot be imported at all.

Format notes:
    The layout is ``id,type,amount,category,memo,date``. Only ``memo`` is
    quoted (embedded quotes doubled); every other field is written as-is, and
    import splits rows on literal commas. A comma inside any field therefore
    shifts the columns of that row. This matches files produced by earlier
    releases, so the format is kept rather than switched to RFC 4180 quoting.

    Import is forgiving: an unreadable amount becomes ``0``, missing optional
    columns take defaults, and only a file without at least one data row is
    rejected. ``ParsedRow.defaulted`` lists the fields that were substituted.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from ..configuration import DEFAULT_CATEGORY
from ..logging_utils import get_logger
from .ledger import Transaction, today_iso

LOGGER = get_logger(__name__)

CSV_HEADER: Tuple[str, ...] = ("id", "type", "amount", "category", "memo", "date")
CSV_MEDIA_TYPE = "text/csv;charset=utf-8"

_LINE_BREAK = re.compile(r"\r?\n")
_NUMERIC_PREFIX = re.compile(
    r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


class InvalidCsvError(ValueError):
    """Raised when CSV text lacks a header plus at least one data row."""


@dataclass(slots=True)
class ParsedRow:
    """Result of parsing one CSV line."""

    transaction: Transaction
    defaulted: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        return not self.defaulted


def _format_amount(amount: float) -> str:
    """Write integral amounts without a trailing ``.0``."""

    if math.isfinite(amount) and float(amount).is_integer():
        return str(int(amount))
    return repr(float(amount))


def _quote_memo(memo: Optional[str]) -> str:
    return '"' + (memo or "").replace('"', '""') + '"'


def _unquote_memo(raw: str) -> str:
    """Strip one surrounding quote on each side and collapse doubled quotes."""

    if raw.startswith('"'):
        raw = raw[1:]
    if raw.endswith('"'):
        raw = raw[:-1]
    return raw.replace('""', '"')


def parse_amount(raw: Optional[str]) -> Optional[float]:
    """Read the leading numeric part of ``raw``.

    Returns ``None`` when no finite number can be read. Trailing text is
    ignored, so ``"12.5원"`` reads as ``12.5``.
    """

    if raw is None:
        return None
    match = _NUMERIC_PREFIX.match(raw)
    if not match:
        return None
    value = float(match.group(1).replace("Infinity", "inf"))
    return value if math.isfinite(value) else None


def to_csv(transactions: Iterable[Transaction]) -> str:
    """Serialise ``transactions`` to CSV text without a trailing newline."""

    lines = [",".join(CSV_HEADER)]
    for transaction in transactions:
        lines.append(
            ",".join(
                [
                    transaction.transaction_id,
                    transaction.transaction_type,
                    _format_amount(transaction.amount),
                    transaction.category,
                    _quote_memo(transaction.memo),
                    transaction.occurred_on,
                ]
            )
        )
    return "\n".join(lines)


def parse_row(
    line: str,
    *,
    default_category: str = DEFAULT_CATEGORY,
    today: Callable[[], str] = today_iso,
) -> ParsedRow:
    """Map one data line onto a transaction by column position."""

    columns = line.split(",")
    defaulted: List[str] = []

    def column(index: int) -> Optional[str]:
        return columns[index] if index < len(columns) else None

    transaction_id = column(0) or ""
    transaction_type = column(1)
    if transaction_type is None:
        transaction_type = ""
        defaulted.append("type")

    amount = parse_amount(column(2))
    # Zero and unreadable values both land on 0.
    if not amount:
        if amount is None:
            defaulted.append("amount")
        amount = 0.0

    category = column(3)
    if category is None:
        category = default_category
        defaulted.append("category")

    raw_memo = column(4)
    memo = _unquote_memo(raw_memo) if raw_memo else ""
    if raw_memo is None:
        defaulted.append("memo")

    occurred_on = column(5)
    if not occurred_on:
        occurred_on = today()
        defaulted.append("date")

    transaction = Transaction(
        transaction_id=transaction_id,
        transaction_type=transaction_type,
        amount=amount,
        category=category,
        memo=memo,
        occurred_on=occurred_on,
    )
    return ParsedRow(transaction=transaction, defaulted=tuple(defaulted))


def parse_csv(
    text: str,
    *,
    default_category: str = DEFAULT_CATEGORY,
    today: Callable[[], str] = today_iso,
) -> List[ParsedRow]:
    """Parse CSV text into tagged rows in file order.

    Raises ``InvalidCsvError`` when fewer than two non-empty lines exist. The
    header line is skipped without being checked.
    """

    lines = [line for line in _LINE_BREAK.split(text) if line]
    if len(lines) < 2:
        raise InvalidCsvError("CSV must contain a header and at least one data row.")

    rows = [
        parse_row(line, default_category=default_category, today=today)
        for line in lines[1:]
    ]
    for number, row in enumerate(rows, start=2):
        if row.defaulted:
            LOGGER.debug(
                "CSV line %s: substituted defaults for %s",
                number,
                ", ".join(row.defaulted),
            )
    return rows


def from_csv(
    text: str,
    *,
    default_category: str = DEFAULT_CATEGORY,
    today: Callable[[], str] = today_iso,
) -> List[Transaction]:
    """Parse CSV text into transactions, see ``parse_csv``."""

    return [
        row.transaction
        for row in parse_csv(text, default_category=default_category, today=today)
    ]
