"""Shared fixtures for the Debt Tracker tests."""

from datetime import date
from typing import Optional

import pytest

from debt_tracker.models.debt import DebtRecord, DebtStatus, DebtType
from debt_tracker.services.storage import InMemoryKeyValueStorage
from debt_tracker.store import DebtStore
from debt_tracker.validation import DebtValidator


STORAGE_KEY = "test_debts"


class ConfirmRecorder:
    """Confirmation callback that records every prompt it is shown."""

    def __init__(self, answer: bool):
        self.answer = answer
        self.messages: list[str] = []

    def __call__(self, message: str) -> bool:
        self.messages.append(message)
        return self.answer


@pytest.fixture
def accept():
    return ConfirmRecorder(True)


@pytest.fixture
def decline():
    return ConfirmRecorder(False)


@pytest.fixture
def memory_storage():
    return InMemoryKeyValueStorage()


@pytest.fixture
def store(memory_storage):
    return DebtStore(
        storage=memory_storage,
        storage_key=STORAGE_KEY,
        validator=DebtValidator(max_amount_cents=1_000_000),
    )


def make_record(
    debt_id: str,
    status: DebtStatus = DebtStatus.OPEN,
    due: Optional[date] = None,
    amount_cents: int = 1000,
    created_at: str = "2025-01-01T00:00:00.000Z",
    title: Optional[str] = None,
    notes: str = "",
    debt_type: DebtType = DebtType.OTHER,
) -> DebtRecord:
    return DebtRecord(
        id=debt_id,
        title=title or f"Debt {debt_id}",
        type=debt_type,
        amount_cents=amount_cents,
        due_date=due,
        status=status,
        notes=notes,
        created_at=created_at,
    )


@pytest.fixture
def scenario_records():
    """A (open, due Jan 10, 10000), B (open, due Jan 5, 5000), C (paid, no due, 2000)."""
    return [
        make_record("A", DebtStatus.OPEN, date(2025, 1, 10), 10000),
        make_record("B", DebtStatus.OPEN, date(2025, 1, 5), 5000),
        make_record("C", DebtStatus.PAID, None, 2000),
    ]
