"""Tests for the key-value storage backends."""

import pytest

from debt_tracker.services.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
    StorageReadError,
    StorageWriteError,
)


class TestInMemoryStorage:
    """Tests for the dictionary-backed storage."""

    def test_get_missing_key(self):
        assert InMemoryKeyValueStorage().get_item("k") is None

    def test_set_get_remove(self):
        storage = InMemoryKeyValueStorage()
        storage.set_item("k", "[]")
        assert storage.get_item("k") == "[]"
        storage.remove_item("k")
        assert storage.get_item("k") is None

    def test_remove_missing_key_is_noop(self):
        InMemoryKeyValueStorage().remove_item("missing")

    def test_initial_items_are_copied(self):
        initial = {"k": "v"}
        storage = InMemoryKeyValueStorage(initial)
        storage.set_item("k", "changed")
        assert initial == {"k": "v"}
        assert storage.keys() == ["k"]

    def test_implements_interface(self):
        assert isinstance(InMemoryKeyValueStorage(), KeyValueStorageInterface)


class TestJsonFileStorage:
    """Tests for the file-per-key storage, always under tmp_path."""

    def test_get_missing_key(self, tmp_path):
        assert JsonFileKeyValueStorage(tmp_path).get_item("debts") is None

    def test_set_creates_nested_dir(self, tmp_path):
        data_dir = tmp_path / "a" / "b"
        storage = JsonFileKeyValueStorage(data_dir)
        storage.set_item("debts", '[{"title": "Café"}]')
        assert storage.path_for("debts") == data_dir / "debts.json"
        assert storage.get_item("debts") == '[{"title": "Café"}]'

    def test_overwrite_leaves_no_temp_file(self, tmp_path):
        storage = JsonFileKeyValueStorage(tmp_path)
        storage.set_item("debts", "[]")
        storage.set_item("debts", "[1]")
        assert storage.get_item("debts") == "[1]"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["debts.json"]

    def test_remove(self, tmp_path):
        storage = JsonFileKeyValueStorage(tmp_path)
        storage.set_item("debts", "[]")
        storage.remove_item("debts")
        assert storage.get_item("debts") is None
        storage.remove_item("debts")

    def test_survives_new_instance(self, tmp_path):
        JsonFileKeyValueStorage(tmp_path).set_item("debts", "[]")
        assert JsonFileKeyValueStorage(tmp_path).get_item("debts") == "[]"

    def test_write_failure_raises_storage_write_error(self, tmp_path):
        """Test a file where the data dir should be makes writes fail."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        storage = JsonFileKeyValueStorage(blocker / "data")
        with pytest.raises(StorageWriteError):
            storage.set_item("debts", "[]")

    def test_unreadable_entry_raises_storage_read_error(self, tmp_path):
        storage = JsonFileKeyValueStorage(tmp_path)
        storage.path_for("debts").mkdir()
        with pytest.raises(StorageReadError):
            storage.get_item("debts")

    def test_undecodable_file_raises_storage_read_error(self, tmp_path):
        storage = JsonFileKeyValueStorage(tmp_path)
        storage.path_for("debts").write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(StorageReadError):
            storage.get_item("debts")
