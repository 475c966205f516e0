"""
Abstract Debt Store Interface

The contract every debt store satisfies. The local store keeps the list
in a key-value backend; a remote-backed store can implement the same
methods later without changing any caller.

Destructive operations take a `confirm` callback. It receives a message
describing what is about to happen and returns True to proceed.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence, Union

from debt_tracker.models.debt import (
    DebtEditForm,
    DebtForm,
    DebtRecord,
    ExportPayload,
    ImportResult,
    ValidationResult,
)
from debt_tracker.store.backup import RawPayload


Confirm = Callable[[str], bool]


class DebtStoreInterface(ABC):
    """Abstract interface for debt stores."""

    @property
    @abstractmethod
    def records(self) -> list[DebtRecord]:
        """Current records in store order (a copy)."""
        pass

    @abstractmethod
    def load(self) -> list[DebtRecord]:
        """
        Rehydrate from persistence.

        Returns:
            The persisted records, or an empty list if nothing usable is
            stored. Never raises.
        """
        pass

    @abstractmethod
    def replace_all(self, records: Sequence[DebtRecord]) -> None:
        """
        Persist `records` as the whole collection and make it current.

        Raises:
            StorageWriteError: If persisting fails (state is unchanged)
        """
        pass

    @abstractmethod
    def create(
        self,
        form: Union[DebtForm, dict],
    ) -> tuple[Optional[DebtRecord], ValidationResult]:
        """
        Validate the creation form and prepend a new record.

        Returns:
            (record, result); record is None when validation failed
        """
        pass

    @abstractmethod
    def update(
        self,
        debt_id: str,
        form: Union[DebtEditForm, dict],
    ) -> tuple[Optional[DebtRecord], ValidationResult]:
        """
        Validate the edit form and apply it to a record.

        Returns:
            (updated_record, result); record is None when validation
            failed or the id is unknown
        """
        pass

    @abstractmethod
    def toggle_status(self, debt_id: str) -> Optional[DebtRecord]:
        """Flip open/paid. Returns the updated record, None if unknown."""
        pass

    @abstractmethod
    def delete(self, debt_id: str, confirm: Confirm) -> bool:
        """Remove a record after confirmation. Returns True if removed."""
        pass

    @abstractmethod
    def clear_all(self, confirm: Confirm) -> bool:
        """Remove every record after confirmation. Returns True if cleared."""
        pass

    @abstractmethod
    def import_replace(self, raw_payload: RawPayload, confirm: Confirm) -> ImportResult:
        """
        Replace the whole collection with a backup after confirmation.

        Raises:
            ImportFormatError: If the payload is malformed (before any prompt)
        """
        pass

    @abstractmethod
    def export_snapshot(self) -> ExportPayload:
        """Versioned backup of the current collection."""
        pass
