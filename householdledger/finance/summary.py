"""Mini README: Monthly totals and per-category net figures.

Structure:
    * validate_month_key - ``YYYY-MM`` check used by month selectors.
    * filter_by_month - keep transactions dated within a month.
    * total_income / total_expense / category_net - aggregations.
    * MonthlySummary - bundle returned to presentation layers.

Everything here is a pure function of its inputs and is recomputed on every
call. Category nets use the "spending" sign convention: expenses add,
everything else subtracts, so a positive value means net spending.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .ledger import Transaction

_MONTH_KEY = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def validate_month_key(value: str) -> str:
    """Return ``value`` stripped if it looks like ``YYYY-MM``."""

    candidate = (value or "").strip()
    if not _MONTH_KEY.match(candidate):
        raise ValueError(f"Month must use the YYYY-MM format: {value!r}")
    return candidate


def filter_by_month(transactions: Iterable[Transaction], month_key: str) -> List[Transaction]:
    """Keep transactions whose date starts with ``month_key``, order preserved."""

    return [transaction for transaction in transactions if transaction.month_key == month_key]


def total_income(transactions: Iterable[Transaction]) -> float:
    """Sum the amounts of income entries."""

    return sum((t.amount for t in transactions if t.is_income), 0.0)


def total_expense(transactions: Iterable[Transaction]) -> float:
    """Sum the amounts of expense entries."""

    return sum((t.amount for t in transactions if t.is_expense), 0.0)


def category_net(transactions: Iterable[Transaction]) -> Dict[str, float]:
    """Accumulate a signed net per category.

    Only categories with at least one entry appear, in order of first
    appearance. Entries whose type is not ``expense`` count as income.
    """

    nets: Dict[str, float] = {}
    for transaction in transactions:
        signed = transaction.amount if transaction.is_expense else -transaction.amount
        nets[transaction.category] = nets.get(transaction.category, 0.0) + signed
    return nets


@dataclass(slots=True)
class MonthlySummary:
    """Derived monthly figures for a single month key."""

    month: str
    income: float
    expense: float
    category_net: Dict[str, float] = field(default_factory=dict)

    @property
    def balance(self) -> float:
        return self.income - self.expense

    def as_dict(self) -> Dict[str, object]:
        """Export the summary for JSON responses."""

        return {
            "month": self.month,
            "income": self.income,
            "expense": self.expense,
            "balance": self.balance,
            "category_net": dict(self.category_net),
        }


def summarise_month(transactions: Iterable[Transaction], month_key: str) -> MonthlySummary:
    """Compute income, expense, balance and category nets for ``month_key``."""

    filtered = filter_by_month(transactions, month_key)
    return MonthlySummary(
        month=month_key,
        income=total_income(filtered),
        expense=total_expense(filtered),
        category_net=category_net(filtered),
    )
