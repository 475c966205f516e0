"""Tests for DebtStore mutations and persistence."""

import json
from datetime import date

import pytest

from conftest import STORAGE_KEY, make_record
from debt_tracker.models.debt import DebtForm, DebtStatus, DebtType
from debt_tracker.services.storage import (
    InMemoryKeyValueStorage,
    StorageReadError,
    StorageWriteError,
)
from debt_tracker.store import DebtStore
from debt_tracker.validation import DebtValidator


FORM = {
    "title": "Nubank",
    "type": "card",
    "amount": "1.200,50",
    "due_date": "2025-01-10",
    "installments": "3",
    "status": "open",
    "card_number": "4111 1111 1111 1234",
    "notes": "",
}


class FailingWriteStorage(InMemoryKeyValueStorage):
    """Storage whose writes fail once `fail` is switched on."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail = False

    def set_item(self, key, value):
        if self.fail:
            raise StorageWriteError("quota exceeded")
        super().set_item(key, value)


class FailingReadStorage(InMemoryKeyValueStorage):

    def get_item(self, key):
        raise StorageReadError("disk unavailable")


def stored_blob(storage):
    return json.loads(storage.get_item(STORAGE_KEY))


def open_store(storage):
    return DebtStore(
        storage=storage,
        storage_key=STORAGE_KEY,
        validator=DebtValidator(max_amount_cents=1_000_000),
    )


class TestCreate:
    """Tests for creating debts."""

    def test_creates_record_from_form(self, store):
        record, result = store.create(FORM)
        assert result.is_valid is True
        assert record.title == "Nubank"
        assert record.type == DebtType.CARD
        assert record.amount_cents == 120050
        assert record.due_date == date(2025, 1, 10)
        assert record.installments == 3
        assert record.status == DebtStatus.OPEN
        assert record.card_last4 == "1234"
        assert record.created_at.endswith("Z")

    def test_full_card_number_never_persisted(self, store, memory_storage):
        store.create(FORM)
        raw = memory_storage.get_item(STORAGE_KEY)
        assert "4111 1111" not in raw
        assert "4111111111111234" not in raw
        assert stored_blob(memory_storage)[0]["cardLast4"] == "1234"

    def test_new_records_are_prepended(self, store):
        first, _ = store.create(FORM)
        second, _ = store.create({**FORM, "title": "Rent"})
        assert [r.id for r in store.records] == [second.id, first.id]

    def test_ids_are_unique(self, store):
        for _ in range(5):
            store.create(FORM)
        ids = [r.id for r in store.records]
        assert len(set(ids)) == 5

    def test_invalid_form_leaves_store_unchanged(self, store, memory_storage):
        record, result = store.create({**FORM, "title": "", "amount": "abc"})
        assert record is None
        assert set(result.errors_by_field()) == {"title", "amount"}
        assert len(store) == 0
        assert memory_storage.get_item(STORAGE_KEY) is None

    def test_accepts_form_model(self, store):
        record, _ = store.create(DebtForm(**FORM))
        assert record is not None

    def test_long_title_is_created(self, store, memory_storage):
        record, result = store.create({**FORM, "title": "x" * 600})
        assert result.is_valid is True
        assert record.title == "x" * 600
        assert len(store) == 1
        assert len(stored_blob(memory_storage)) == 1

    def test_optional_fields_default(self, store):
        record, _ = store.create({
            "title": "Loan", "type": "loan", "amount": "10", "status": "paid",
        })
        assert record.due_date is None
        assert record.installments == 1
        assert record.card_last4 is None
        assert record.notes == ""

    def test_persists_camel_case_array(self, store, memory_storage):
        store.create(FORM)
        blob = stored_blob(memory_storage)
        assert isinstance(blob, list)
        assert set(blob[0]) == {
            "id", "title", "type", "amountCents", "dueDate", "installments",
            "status", "cardLast4", "notes", "createdAt",
        }


class TestUpdate:
    """Tests for editing debts."""

    def test_updates_editable_fields(self, store):
        created, _ = store.create(FORM)
        updated, result = store.update(created.id, {
            "title": "Nubank Gold",
            "amount": "99,90",
            "due_date": "",
            "status": "paid",
            "notes": "renegotiated",
        })
        assert result.is_valid is True
        assert updated.id == created.id
        assert updated.title == "Nubank Gold"
        assert updated.amount_cents == 9990
        assert updated.due_date is None
        assert updated.status == DebtStatus.PAID
        assert updated.notes == "renegotiated"
        # Not editable
        assert updated.type == created.type
        assert updated.card_last4 == created.card_last4
        assert updated.created_at == created.created_at
        assert store.get(created.id) == updated

    def test_keeps_position(self, store):
        store.create(FORM)
        middle, _ = store.create({**FORM, "title": "Middle"})
        store.create(FORM)
        store.update(middle.id, {"title": "Edited", "amount": "1", "status": "open"})
        assert store.records[1].title == "Edited"

    def test_invalid_edit_changes_nothing(self, store):
        created, _ = store.create(FORM)
        updated, result = store.update(created.id, {"title": "", "amount": "1", "status": "open"})
        assert updated is None
        assert result.is_valid is False
        assert store.get(created.id) == created

    def test_unknown_id(self, store):
        store.create(FORM)
        before = store.records
        updated, result = store.update("missing", {"title": "X", "amount": "1", "status": "open"})
        assert updated is None
        assert result.is_valid is True
        assert store.records == before


class TestToggleStatus:
    """Tests for flipping open/paid."""

    def test_toggle_twice_restores(self, store):
        created, _ = store.create(FORM)
        assert store.toggle_status(created.id).status == DebtStatus.PAID
        assert store.toggle_status(created.id).status == DebtStatus.OPEN
        assert store.get(created.id) == created

    def test_persists(self, store, memory_storage):
        created, _ = store.create(FORM)
        store.toggle_status(created.id)
        assert stored_blob(memory_storage)[0]["status"] == "paid"

    def test_unknown_id(self, store):
        assert store.toggle_status("missing") is None


class TestDeleteAndClear:
    """Tests for the confirmed destructive operations."""

    def test_delete_with_confirmation(self, store, accept):
        created, _ = store.create(FORM)
        assert store.delete(created.id, accept) is True
        assert store.get(created.id) is None
        assert accept.messages == ['Delete the debt "Nubank"?']

    def test_declined_delete_keeps_record(self, store, decline):
        created, _ = store.create(FORM)
        assert store.delete(created.id, decline) is False
        assert store.get(created.id) == created

    def test_delete_unknown_id_does_not_prompt(self, store, accept):
        assert store.delete("missing", accept) is False
        assert accept.messages == []

    def test_clear_all(self, store, accept, memory_storage):
        store.create(FORM)
        store.create(FORM)
        assert store.clear_all(accept) is True
        assert len(store) == 0
        assert stored_blob(memory_storage) == []
        assert accept.messages == ["Are you sure you want to delete all debts stored here?"]

    def test_declined_clear_keeps_everything(self, store, decline):
        store.create(FORM)
        assert store.clear_all(decline) is False
        assert len(store) == 1


class TestLoad:
    """Tests for rehydrating from storage."""

    def test_nothing_stored(self, store):
        assert store.records == []

    def test_rehydrates_persisted_records(self, store, memory_storage):
        created, _ = store.create(FORM)
        reopened = open_store(memory_storage)
        assert reopened.records == [created]

    @pytest.mark.parametrize("blob", ["not json", "{\"debts\": []}", "42", "null"])
    def test_unusable_blob_loads_empty(self, blob):
        storage = InMemoryKeyValueStorage({STORAGE_KEY: blob})
        assert open_store(storage).records == []

    def test_skips_untitled_entries_and_renumbers_duplicates(self):
        good = make_record("a").to_storage_dict()
        blob = json.dumps([good, {"id": "b"}, "junk", good])
        storage = InMemoryKeyValueStorage({STORAGE_KEY: blob})
        records = open_store(storage).records
        assert len(records) == 2
        assert records[0].id == "a"
        assert records[1].id != "a"
        assert records[1].title == records[0].title

    def test_lenient_entries_survive_load(self):
        """Test entries written by older versions are coerced, not dropped."""
        base = make_record("a").to_storage_dict()
        blob = json.dumps([
            {**base, "id": "frac", "installments": 2.5},
            {**base, "id": "nan", "installments": None},
            {**base, "id": "odd", "type": "crypto", "amountCents": 12.4, "status": "late"},
        ])
        storage = InMemoryKeyValueStorage({STORAGE_KEY: blob})
        records = {r.id: r for r in open_store(storage).records}

        assert set(records) == {"frac", "nan", "odd"}
        assert records["frac"].installments == 2
        assert records["nan"].installments == 1
        assert records["odd"].type == DebtType.OTHER
        assert records["odd"].amount_cents == 12
        assert records["odd"].status == DebtStatus.OPEN
        assert records["odd"].created_at == base["createdAt"]

    def test_lenient_entries_kept_after_next_write(self):
        base = make_record("a").to_storage_dict()
        storage = InMemoryKeyValueStorage({
            STORAGE_KEY: json.dumps([{**base, "installments": None}]),
        })
        store = open_store(storage)
        store.create(FORM)
        blob = stored_blob(storage)
        assert [entry["id"] for entry in blob][1:] == ["a"]
        assert blob[1]["installments"] == 1

    def test_legacy_type_names_load(self):
        entry = {**make_record("a").to_storage_dict(), "type": "cartao"}
        storage = InMemoryKeyValueStorage({STORAGE_KEY: json.dumps([entry])})
        assert open_store(storage).records[0].type == DebtType.CARD

    def test_read_error_loads_empty(self):
        assert open_store(FailingReadStorage()).records == []

    def test_other_keys_untouched(self, memory_storage):
        memory_storage.set_item("other", "keep me")
        store = open_store(memory_storage)
        store.create(FORM)
        assert memory_storage.get_item("other") == "keep me"


class TestReplaceAll:
    """Tests for the write-then-commit persistence path."""

    def test_write_failure_keeps_state(self, accept):
        storage = FailingWriteStorage()
        store = open_store(storage)
        created, _ = store.create(FORM)
        storage.fail = True

        with pytest.raises(StorageWriteError):
            store.create({**FORM, "title": "Rent"})
        with pytest.raises(StorageWriteError):
            store.clear_all(accept)

        assert store.records == [created]
        storage.fail = False
        assert [r.id for r in open_store(storage).records] == [created.id]

    def test_rejects_duplicate_ids(self, store):
        with pytest.raises(ValueError):
            store.replace_all([make_record("a"), make_record("a")])
        assert store.records == []

    def test_replaces_whole_collection(self, store, memory_storage):
        store.replace_all([make_record("x"), make_record("y")])
        assert [entry["id"] for entry in stored_blob(memory_storage)] == ["x", "y"]
        assert len(store) == 2
