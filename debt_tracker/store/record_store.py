"""
Local Debt Store

Owns the authoritative list of debt records and keeps it in sync with a
single JSON array stored under one key of a key-value backend.

Every mutation follows the same path:
    validate -> compute the new full list -> replace_all -> log

replace_all writes first and only then swaps the in-memory list, so a
failed write leaves the store exactly as it was.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional, Sequence, Union

from debt_tracker.config import get_settings
from debt_tracker.events import StoreEventLogger
from debt_tracker.models.debt import (
    DebtEditForm,
    DebtForm,
    DebtRecord,
    ExportPayload,
    ImportResult,
    ImportStatus,
    ValidationResult,
)
from debt_tracker.models.events import StoreEventBuilder
from debt_tracker.services.storage import (
    KeyValueStorageInterface,
    StorageError,
    StorageWriteError,
)
from debt_tracker.store.backup import (
    ImportFormatError,
    RawPayload,
    build_export_payload,
    decode_payload,
    export_filename,
    normalize_entries,
    render_export_json,
)
from debt_tracker.store.identity import new_debt_id, utc_now_iso
from debt_tracker.store.interface import Confirm, DebtStoreInterface
from debt_tracker.validation import (
    DebtValidator,
    extract_last4,
    parse_installments,
    parse_iso_date,
    parse_money_to_cents,
    parse_status,
    parse_type,
    sanitize_text,
)


class DebtStore(DebtStoreInterface):
    """
    Debt store backed by a key-value storage.

    The store is loaded once on construction. After that the in-memory
    list is authoritative and every change is written through.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        storage_key: Optional[str] = None,
        validator: Optional[DebtValidator] = None,
        event_logger: Optional[StoreEventLogger] = None,
        export_version: Optional[int] = None,
        export_prefix: Optional[str] = None,
    ):
        settings = get_settings()
        self._storage = storage
        self._key = storage_key or settings.storage.storage_key
        self._validator = validator or DebtValidator()
        self._events = event_logger or StoreEventLogger()
        self._export_version = export_version or settings.app.export_format_version
        self._export_prefix = export_prefix or settings.app.export_filename_prefix
        self._records: list[DebtRecord] = []
        self.load()

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def storage_key(self) -> str:
        return self._key

    @property
    def records(self) -> list[DebtRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def get(self, debt_id: str) -> Optional[DebtRecord]:
        for record in self._records:
            if record.id == debt_id:
                return record
        return None

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _decode_blob(self, raw: Optional[str]) -> list[DebtRecord]:
        if raw is None:
            return []
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            self._events.log(StoreEventBuilder.storage_read_failed(self._key, str(e)))
            return []
        if not isinstance(parsed, list):
            self._events.log(StoreEventBuilder.storage_read_failed(
                self._key, f"expected a JSON array, got {type(parsed).__name__}",
            ))
            return []

        # Same coercion as import; only entries without a title are lost
        records, skipped = normalize_entries(parsed)
        if skipped:
            self._events.log(StoreEventBuilder.storage_read_failed(
                self._key, f"skipped {skipped} entries without a title",
            ))
        return records

    def load(self) -> list[DebtRecord]:
        try:
            raw = self._storage.get_item(self._key)
        except StorageError as e:
            self._events.log(StoreEventBuilder.storage_read_failed(self._key, str(e)))
            raw = None
        self._records = self._decode_blob(raw)
        return self.records

    def replace_all(self, records: Sequence[DebtRecord]) -> None:
        records = list(records)
        ids = [record.id for record in records]
        if len(ids) != len(set(ids)):
            raise ValueError("Debt ids must be unique within the store")

        blob = json.dumps(
            [record.to_storage_dict() for record in records],
            ensure_ascii=False,
        )
        try:
            self._storage.set_item(self._key, blob)
        except StorageWriteError as e:
            self._events.log(StoreEventBuilder.storage_write_failed(self._key, str(e)))
            raise
        self._records = records

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(
        self,
        form: Union[DebtForm, dict],
    ) -> tuple[Optional[DebtRecord], ValidationResult]:
        if not isinstance(form, DebtForm):
            form = DebtForm.model_validate(form)

        result = self._validator.validate_create(form)
        if not result.is_valid:
            self._events.log(StoreEventBuilder.validation_failed(
                operation="create",
                issues=[issue.model_dump() for issue in result.issues],
            ))
            return None, result

        record = DebtRecord(
            id=new_debt_id({r.id for r in self._records}),
            title=sanitize_text(form.title),
            type=parse_type(form.type),
            amount_cents=parse_money_to_cents(form.amount),
            due_date=parse_iso_date(form.due_date),
            installments=parse_installments(form.installments),
            status=parse_status(form.status),
            card_last4=extract_last4(form.card_number),
            notes=sanitize_text(form.notes),
            created_at=utc_now_iso(),
        )
        self.replace_all([record, *self._records])
        self._events.log(StoreEventBuilder.debt_created(
            record.id, record.title, record.amount_cents,
        ))
        return record, result

    def update(
        self,
        debt_id: str,
        form: Union[DebtEditForm, dict],
    ) -> tuple[Optional[DebtRecord], ValidationResult]:
        if not isinstance(form, DebtEditForm):
            form = DebtEditForm.model_validate(form)

        result = self._validator.validate_edit(form)
        if not result.is_valid:
            self._events.log(StoreEventBuilder.validation_failed(
                operation="update",
                issues=[issue.model_dump() for issue in result.issues],
                debt_id=debt_id,
            ))
            return None, result

        target = self.get(debt_id)
        if target is None:
            return None, result

        changes = {
            "title": sanitize_text(form.title),
            "amount_cents": parse_money_to_cents(form.amount),
            "due_date": parse_iso_date(form.due_date),
            "status": parse_status(form.status),
            "notes": sanitize_text(form.notes),
        }
        changed_fields = [
            name for name, value in changes.items()
            if getattr(target, name) != value
        ]
        updated = target.model_copy(update=changes)

        self.replace_all([
            updated if record.id == debt_id else record
            for record in self._records
        ])
        self._events.log(StoreEventBuilder.debt_updated(debt_id, changed_fields))
        return updated, result

    def toggle_status(self, debt_id: str) -> Optional[DebtRecord]:
        target = self.get(debt_id)
        if target is None:
            return None

        updated = target.model_copy(update={"status": target.status.toggled()})
        self.replace_all([
            updated if record.id == debt_id else record
            for record in self._records
        ])
        self._events.log(StoreEventBuilder.status_toggled(debt_id, updated.status.value))
        return updated

    def delete(self, debt_id: str, confirm: Confirm) -> bool:
        target = self.get(debt_id)
        if target is None:
            return False

        if not confirm(f'Delete the debt "{target.title}"?'):
            self._events.log(StoreEventBuilder.action_declined("delete debt", debt_id))
            return False

        self.replace_all([r for r in self._records if r.id != debt_id])
        self._events.log(StoreEventBuilder.debt_deleted(debt_id))
        return True

    def clear_all(self, confirm: Confirm) -> bool:
        if not confirm("Are you sure you want to delete all debts stored here?"):
            self._events.log(StoreEventBuilder.action_declined("clear all debts"))
            return False

        removed = len(self._records)
        self.replace_all([])
        self._events.log(StoreEventBuilder.store_cleared(removed))
        return True

    # -------------------------------------------------------------------------
    # Backup
    # -------------------------------------------------------------------------

    def import_replace(self, raw_payload: RawPayload, confirm: Confirm) -> ImportResult:
        try:
            payload = decode_payload(raw_payload)
        except ImportFormatError as e:
            self._events.log(StoreEventBuilder.import_rejected(str(e)))
            raise

        records, skipped = normalize_entries(payload["debts"])

        if not confirm(f"Import {len(records)} debts? This will replace the current data."):
            self._events.log(StoreEventBuilder.import_cancelled(len(records)))
            return ImportResult(
                status=ImportStatus.CANCELLED,
                record_count=len(records),
                skipped_count=skipped,
            )

        self.replace_all(records)
        self._events.log(StoreEventBuilder.import_completed(len(records), skipped))
        return ImportResult(
            status=ImportStatus.IMPORTED,
            record_count=len(records),
            skipped_count=skipped,
        )

    def import_file(self, path: Union[str, Path], confirm: Confirm) -> ImportResult:
        """
        Import a backup file.

        Raises:
            ImportFormatError: If the file cannot be read or is malformed
        """
        try:
            raw = Path(path).read_bytes()
        except OSError as e:
            self._events.log(StoreEventBuilder.import_rejected(str(e)))
            raise ImportFormatError(f"Could not read backup file {path}: {e}")
        return self.import_replace(raw, confirm)

    def export_snapshot(self) -> ExportPayload:
        payload = build_export_payload(self._records, version=self._export_version)
        self._events.log(StoreEventBuilder.export_created(len(payload.debts)))
        return payload

    def export_json(self) -> str:
        """Current collection as indented backup JSON."""
        return render_export_json(self.export_snapshot())

    def export_to_file(self, directory: Union[str, Path], on: Optional[date] = None) -> Path:
        """
        Write a backup into `directory`, named after the export date.

        Without `on`, the date is taken from the payload's exportedAt (UTC).

        Returns:
            Path of the written file
        """
        payload = build_export_payload(self._records, version=self._export_version)
        on = on or date.fromisoformat(payload.exported_at[:10])

        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / export_filename(self._export_prefix, on)
        path.write_text(render_export_json(payload), encoding="utf-8")
        self._events.log(StoreEventBuilder.export_created(len(payload.debts), path.name))
        return path
