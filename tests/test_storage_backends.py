"""Mini README: Tests for the key-value persistence backends.

Both backends must honour the same get/set/delete contract; the file backend
additionally keeps keys inside its directory.
"""

from __future__ import annotations

import pytest

from householdledger.storage import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore


@pytest.fixture(params=["memory", "file"])
def backend(request, tmp_path) -> KeyValueStore:
    if request.param == "memory":
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(tmp_path / "slots")


def test_get_set_delete_contract(backend: KeyValueStore) -> None:
    """Values round trip, overwrite, and disappear on delete."""

    assert backend.get("ledger_transactions_v1") is None

    backend.set("ledger_transactions_v1", '[{"memo": "점심"}]')
    backend.set("ledger_transactions_v1", "[]")
    assert backend.get("ledger_transactions_v1") == "[]"
    assert "ledger_transactions_v1" in backend

    backend.delete("ledger_transactions_v1")
    backend.delete("ledger_transactions_v1")
    assert backend.get("ledger_transactions_v1") is None


def test_file_backend_writes_utf8_file(tmp_path) -> None:
    store = JsonFileKeyValueStore(tmp_path)
    store.set("slot", '["식비"]')

    assert (tmp_path / "slot.json").read_text(encoding="utf-8") == '["식비"]'
    assert [path.name for path in tmp_path.iterdir()] == ["slot.json"]


@pytest.mark.parametrize("key", ["../escape", "a/b", "", ".."])
def test_file_backend_rejects_unsafe_keys(tmp_path, key: str) -> None:
    with pytest.raises(ValueError):
        JsonFileKeyValueStore(tmp_path).get(key)
