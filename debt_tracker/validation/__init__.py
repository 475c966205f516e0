"""Form validation and input parsing package."""

from debt_tracker.validation.parsers import (
    extract_last4,
    normalize_amount_cents,
    normalize_due_date,
    normalize_status,
    normalize_type,
    parse_installments,
    parse_iso_date,
    parse_money_to_cents,
    parse_status,
    parse_type,
    sanitize_text,
)
from debt_tracker.validation.validator import DebtValidator

__all__ = [
    "DebtValidator",
    "extract_last4",
    "normalize_amount_cents",
    "normalize_due_date",
    "normalize_status",
    "normalize_type",
    "parse_installments",
    "parse_iso_date",
    "parse_money_to_cents",
    "parse_status",
    "parse_type",
    "sanitize_text",
]
