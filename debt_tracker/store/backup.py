"""
Backup Import / Export

Export writes {"version": 1, "exportedAt": ..., "debts": [...]}.
Import accepts any JSON document with a "debts" list and normalizes each
entry into a valid DebtRecord:

    missing id                -> generated (duplicates are regenerated too)
    missing/invalid amount    -> 0
    unknown status            -> "open"
    unknown type              -> "other" (legacy Portuguese names are mapped)
    long card digit sequence  -> last 4 digits only
    invalid installments      -> 1
    invalid due date          -> none
    missing createdAt         -> now

Entries that are not objects, or have no title after trimming, are dropped.
The version field is not checked.
"""

import json
from datetime import date
from typing import Any, Mapping, Optional, Union

from debt_tracker.models.debt import DebtRecord, ExportPayload
from debt_tracker.store.identity import new_debt_id, utc_now_iso
from debt_tracker.validation.parsers import (
    extract_last4,
    normalize_amount_cents,
    normalize_due_date,
    normalize_status,
    normalize_type,
    parse_installments,
    sanitize_text,
)


RawPayload = Union[str, bytes, bytearray, Mapping[str, Any]]


class ImportFormatError(Exception):
    """Backup payload is not valid JSON or has no "debts" list."""
    pass


def decode_payload(raw_payload: RawPayload) -> Mapping[str, Any]:
    """
    Decode a raw backup and check its top-level shape.

    Raises:
        ImportFormatError: If the payload is not JSON, not an object,
                           or has no "debts" list
    """
    if isinstance(raw_payload, (bytes, bytearray)):
        try:
            raw_payload = raw_payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ImportFormatError(f"Backup is not UTF-8 text: {e}")

    if isinstance(raw_payload, str):
        try:
            parsed = json.loads(raw_payload)
        except json.JSONDecodeError as e:
            raise ImportFormatError(f"Backup is not valid JSON: {e}")
    else:
        parsed = raw_payload

    if not isinstance(parsed, Mapping):
        raise ImportFormatError('Invalid format: expected an object like {"debts": []}')
    if not isinstance(parsed.get("debts"), list):
        raise ImportFormatError('Invalid format: expected {"debts": []}')
    return parsed


def normalize_entry(entry: Any, taken_ids: set[str]) -> Optional[DebtRecord]:
    """
    Coerce one imported entry into a DebtRecord.

    Returns None when the entry must be dropped. Adds the chosen id to
    `taken_ids`.
    """
    if not isinstance(entry, Mapping):
        return None

    title = sanitize_text(entry.get("title"))
    if not title:
        return None

    debt_id = sanitize_text(entry.get("id"))
    if not debt_id or debt_id in taken_ids:
        debt_id = new_debt_id(taken_ids)
    taken_ids.add(debt_id)

    card_last4 = entry.get("cardLast4")
    return DebtRecord(
        id=debt_id,
        title=title,
        type=normalize_type(entry.get("type")),
        amount_cents=normalize_amount_cents(entry.get("amountCents")),
        due_date=normalize_due_date(entry.get("dueDate")),
        installments=parse_installments(entry.get("installments")),
        status=normalize_status(entry.get("status")),
        card_last4=extract_last4(card_last4) if card_last4 else None,
        notes=sanitize_text(entry.get("notes")),
        created_at=sanitize_text(entry.get("createdAt")) or utc_now_iso(),
    )


def normalize_entries(entries: list[Any]) -> tuple[list[DebtRecord], int]:
    """
    Normalize every entry of an imported "debts" list.

    Returns:
        (records, skipped_count)
    """
    taken_ids: set[str] = set()
    records = []
    for entry in entries:
        record = normalize_entry(entry, taken_ids)
        if record is not None:
            records.append(record)
    return records, len(entries) - len(records)


def build_export_payload(records: list[DebtRecord], version: int = 1) -> ExportPayload:
    return ExportPayload(
        version=version,
        exported_at=utc_now_iso(),
        debts=list(records),
    )


def render_export_json(payload: ExportPayload) -> str:
    """Indented JSON text of a backup."""
    return json.dumps(payload.to_json_dict(), ensure_ascii=False, indent=2)


def export_filename(prefix: str = "financas-debts-backup", on: Optional[date] = None) -> str:
    """
    Backup filename carrying the export date, e.g. prefix-2025-01-31.json.

    Defaults to today's UTC date, the same day exportedAt carries.
    """
    on = on or date.fromisoformat(utc_now_iso()[:10])
    return f"{prefix}-{on.isoformat()}.json"
