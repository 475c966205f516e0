"""Debt store package."""

from debt_tracker.store.backup import (
    ImportFormatError,
    build_export_payload,
    decode_payload,
    export_filename,
    normalize_entries,
    normalize_entry,
    render_export_json,
)
from debt_tracker.store.identity import new_debt_id, utc_now_iso
from debt_tracker.store.interface import Confirm, DebtStoreInterface
from debt_tracker.store.record_store import DebtStore

__all__ = [
    "Confirm",
    "DebtStore",
    "DebtStoreInterface",
    "ImportFormatError",
    "build_export_payload",
    "decode_payload",
    "export_filename",
    "new_debt_id",
    "normalize_entries",
    "normalize_entry",
    "render_export_json",
    "utc_now_iso",
]
