"""Tests for the key-value stores."""

import pytest

from pocketbook.exceptions import PersistenceError
from pocketbook.ledger import EXPENSES_KEY, ExpenseLedger
from pocketbook.storage import InMemoryStore, JSONFileStore


class TestInMemoryStore:
    def test_read_missing_key(self):
        assert InMemoryStore().read("expenses") is None

    def test_write_overwrites(self):
        store = InMemoryStore({"goals": "[]"})
        store.write("goals", "[1]")
        assert store.read("goals") == "[1]"
        assert "goals" in store


class TestJSONFileStore:
    def test_creates_directory(self, tmp_path):
        target = tmp_path / "nested" / "data"
        store = JSONFileStore(target)
        assert target.is_dir()
        assert store.base_path == target

    def test_round_trip(self, tmp_path):
        store = JSONFileStore(tmp_path)
        store.write("expenses", '[{"id": "1"}]')

        assert store.read("expenses") == '[{"id": "1"}]'
        assert (tmp_path / "expenses.json").exists()
        assert not list(tmp_path.glob("*.tmp"))

    def test_read_missing_key(self, tmp_path):
        assert JSONFileStore(tmp_path).read("goals") is None

    @pytest.mark.parametrize("key", ["../escape", "a/b", "", "with space"])
    def test_rejects_unsafe_keys(self, tmp_path, key):
        with pytest.raises(ValueError):
            JSONFileStore(tmp_path).write(key, "[]")

    def test_write_failure_raises_persistence_error(self, tmp_path):
        store = JSONFileStore(tmp_path)
        # A directory where the file should go makes the final replace fail.
        (tmp_path / "goals.json").mkdir()
        with pytest.raises(PersistenceError):
            store.write("goals", "[]")

    def test_undecodable_file_raises_persistence_error(self, tmp_path):
        (tmp_path / "expenses.json").write_bytes(b"[\xff\xfe]")
        with pytest.raises(PersistenceError):
            JSONFileStore(tmp_path).read("expenses")

    def test_undecodable_file_degrades_to_empty(self, tmp_path):
        (tmp_path / "expenses.json").write_bytes(b"[\xff\xfe]")
        ledger = ExpenseLedger(JSONFileStore(tmp_path))
        assert ledger.expenses == []
        assert ledger.goals == []

    def test_ledger_survives_restart(self, tmp_path):
        ledger = ExpenseLedger(JSONFileStore(tmp_path))
        ledger.add_expense("Coffee", "4.50", "food")

        reloaded = ExpenseLedger(JSONFileStore(tmp_path))

        assert reloaded.expenses == ledger.expenses
        assert (tmp_path / f"{EXPENSES_KEY}.json").exists()

    def test_corrupt_file_degrades_to_empty(self, tmp_path):
        (tmp_path / "expenses.json").write_text("{broken", encoding="utf-8")
        assert ExpenseLedger(JSONFileStore(tmp_path)).expenses == []
