"""Mini README: Tests for the presentation-facing ledger service.

These tests drive ``LedgerService`` the way the web interface and CLI do:
form submissions, CSV export/import, query month selection and summaries,
all over an in-memory slot with a fixed clock.
"""

from __future__ import annotations

import pytest

from householdledger.configuration import LedgerSettings
from householdledger.finance import (
    InvalidAmountError,
    InvalidCsvError,
    LedgerService,
    TransactionStore,
    create_ledger_service,
)
from householdledger.storage import InMemoryKeyValueStore


def _service(backend: InMemoryKeyValueStore | None = None) -> LedgerService:
    counter = iter(range(1, 1000))
    store = TransactionStore(backend or InMemoryKeyValueStore())
    store.load()
    return LedgerService(
        store,
        today=lambda: "2024-03-15",
        id_factory=lambda: f"id{next(counter)}",
    )


def test_add_transaction_normalises_form_values() -> None:
    """Amounts are stored as absolute values and blanks take defaults."""

    service = _service()

    transaction = service.add_transaction({"type": "Income", "amount": "-1500", "category": "", "memo": None})

    assert transaction.transaction_type == "income"
    assert transaction.amount == pytest.approx(1500.0)
    assert transaction.category == "기타"
    assert transaction.memo == ""
    assert transaction.occurred_on == "2024-03-15"
    assert service.list_transactions() == [transaction]


@pytest.mark.parametrize("amount", ["", "abc", "0", None, 0, "1e999", "Infinity", float("inf")])
def test_add_transaction_rejects_bad_amount(amount: object) -> None:
    """Rejected amounts leave the ledger untouched."""

    service = _service()

    with pytest.raises(InvalidAmountError):
        service.add_transaction({"type": "expense", "amount": amount})
    assert service.list_transactions() == []


def test_add_transaction_rejects_unknown_type_and_bad_date() -> None:
    service = _service()

    with pytest.raises(ValueError):
        service.add_transaction({"type": "transfer", "amount": "10"})
    with pytest.raises(ValueError):
        service.add_transaction({"type": "expense", "amount": "10", "date": "15/03/2024"})
    assert service.list_transactions() == []


def test_export_csv_names_file_after_today() -> None:
    service = _service()
    service.add_transaction({"type": "expense", "amount": "300", "category": "식비", "date": "2024-03-02"})

    export = service.export_csv()

    assert export.filename == "ledger_2024-03-15.csv"
    assert export.media_type == "text/csv;charset=utf-8"
    assert export.content.splitlines()[1] == 'id1,expense,300,식비,"",2024-03-02'


def test_import_csv_prepends_rows() -> None:
    """Imported rows come first, ahead of existing entries, BOM tolerated."""

    service = _service()
    service.add_transaction({"type": "expense", "amount": "5", "date": "2024-03-01"})
    payload = "\ufeffid,type,amount,category,memo,date\na,income,10,기타,\"\",2024-02-01\nb,expense,x,식비,\"\",2024-02-02"

    imported = service.import_csv(payload.encode("utf-8"))

    assert [t.transaction_id for t in imported] == ["a", "b"]
    assert [t.transaction_id for t in service.list_transactions()] == ["a", "b", "id1"]
    assert imported[1].amount == 0


def test_import_csv_header_only_leaves_store_unchanged() -> None:
    backend = InMemoryKeyValueStore()
    service = _service(backend)
    service.add_transaction({"type": "expense", "amount": "5"})
    before = backend.get("ledger_transactions_v1")

    with pytest.raises(InvalidCsvError):
        service.import_csv("id,type,amount,category,memo,date")

    assert len(service.list_transactions()) == 1
    assert backend.get("ledger_transactions_v1") == before


def test_summary_uses_query_month() -> None:
    """Without an explicit month the selected query month is summarised."""

    service = _service()
    service.add_transaction({"type": "income", "amount": "1000", "date": "2024-03-01"})
    service.add_transaction({"type": "expense", "amount": "300", "category": "식비", "date": "2024-03-02"})
    service.add_transaction({"type": "expense", "amount": "70", "date": "2024-04-02"})

    assert service.query_month == "2024-03"
    summary = service.get_summary()
    assert (summary.income, summary.expense, summary.balance) == (1000.0, 300.0, 700.0)
    assert summary.category_net == {"식비": 300.0, "기타": -1000.0}

    service.set_query_month("2024-04")
    assert service.get_summary().expense == pytest.approx(70.0)
    assert [t.occurred_on for t in service.list_month()] == ["2024-04-02"]
    with pytest.raises(ValueError):
        service.set_query_month("April")


def test_remove_and_reset() -> None:
    backend = InMemoryKeyValueStore()
    service = _service(backend)
    service.add_transaction({"type": "expense", "amount": "1"})
    service.add_transaction({"type": "expense", "amount": "2"})

    assert service.remove_transaction("id1") == 1
    assert [t.transaction_id for t in service.list_transactions()] == ["id2"]

    service.reset_all()
    assert service.list_transactions() == []
    assert backend.get("ledger_transactions_v1") is None


def test_create_ledger_service_persists_to_data_directory(tmp_path) -> None:
    """A file-backed service survives being rebuilt from the same settings."""

    settings = LedgerSettings(data_directory=tmp_path, storage_key="test_slot")
    first = create_ledger_service(settings)
    recorded = first.add_transaction({"type": "expense", "amount": "42", "memo": "커피"})

    second = create_ledger_service(settings)

    assert (tmp_path / "test_slot.json").exists()
    assert second.list_transactions() == [recorded]


def test_failed_write_leaves_ledger_unchanged() -> None:
    """When the slot cannot be written, the add is not kept in memory either."""

    class UnwritableStore(InMemoryKeyValueStore):
        def set(self, key: str, value: str) -> None:
            raise OSError("disk full")

    service = _service(UnwritableStore())

    with pytest.raises(OSError):
        service.add_transaction({"type": "expense", "amount": "10"})
    assert service.list_transactions() == []
