"""Mini README: Tests for the monthly summary engine.

Structure:
    * test_month_filter_boundary - month prefix matching at month end.
    * test_summary_scenario - totals, balance and category nets together.
    * test_category_net_sign_convention - expense positive, income negative.
    * test_validate_month_key - accepted and rejected month keys.
"""

from __future__ import annotations

import pytest

from householdledger.finance import (
    Transaction,
    category_net,
    filter_by_month,
    summarise_month,
    total_expense,
    total_income,
    validate_month_key,
)


def test_month_filter_boundary() -> None:
    """A transaction on the 31st belongs to its own month only."""

    transaction = Transaction("1", "expense", 10.0, "식비", "", "2024-01-31")

    assert filter_by_month([transaction], "2024-01") == [transaction]
    assert filter_by_month([transaction], "2024-02") == []


def test_filter_preserves_input_order() -> None:
    transactions = [
        Transaction("c", "expense", 1.0, "식비", "", "2024-03-09"),
        Transaction("x", "expense", 1.0, "식비", "", "2024-04-01"),
        Transaction("a", "income", 1.0, "기타", "", "2024-03-01"),
    ]

    assert [t.transaction_id for t in filter_by_month(transactions, "2024-03")] == ["c", "a"]


def test_summary_scenario() -> None:
    """Income, expense, balance and nets for a two-entry month."""

    transactions = [
        Transaction("1", "income", 1000.0, "기타", "", "2024-03-01"),
        Transaction("2", "expense", 300.0, "식비", "", "2024-03-02"),
    ]

    summary = summarise_month(transactions, "2024-03")

    assert summary.income == pytest.approx(1000.0)
    assert summary.expense == pytest.approx(300.0)
    assert summary.balance == pytest.approx(700.0)
    assert summary.category_net == {"기타": -1000.0, "식비": 300.0}
    assert summary.as_dict()["balance"] == pytest.approx(700.0)


def test_category_net_sign_convention() -> None:
    """Expense-only nets positive, income-only negative, balanced stays at zero."""

    transactions = [
        Transaction("1", "expense", 50.0, "교통", "", "2024-03-01"),
        Transaction("2", "income", 80.0, "용돈/생활비", "", "2024-03-01"),
        Transaction("3", "expense", 20.0, "쇼핑", "", "2024-03-02"),
        Transaction("4", "income", 20.0, "쇼핑", "", "2024-03-03"),
    ]

    nets = category_net(transactions)

    assert nets["교통"] > 0
    assert nets["용돈/생활비"] < 0
    assert nets["쇼핑"] == 0
    assert "식비" not in nets


def test_empty_month_has_zero_totals() -> None:
    summary = summarise_month([], "2024-03")

    assert summary.income == 0
    assert summary.expense == 0
    assert summary.balance == 0
    assert summary.category_net == {}


def test_unknown_types_only_reach_category_net() -> None:
    """Imported rows with other types are left out of totals but net as income."""

    transactions = [Transaction("1", "refund", 40.0, "쇼핑", "", "2024-03-01")]

    assert total_income(transactions) == 0
    assert total_expense(transactions) == 0
    assert category_net(transactions) == {"쇼핑": -40.0}


@pytest.mark.parametrize("value", ["2024-01", " 2024-12 "])
def test_validate_month_key_accepts(value: str) -> None:
    assert validate_month_key(value) == value.strip()


@pytest.mark.parametrize("value", ["2024-13", "2024-1", "202401", "", "2024-01-01"])
def test_validate_month_key_rejects(value: str) -> None:
    with pytest.raises(ValueError):
        validate_month_key(value)
