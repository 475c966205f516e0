"""
Input parsing helpers.

These turn raw text (form fields, imported JSON values) into typed values.
Parsers used by the forms return None on bad input and leave reporting to
the validator; the normalize_* helpers used by import never fail and fall
back to a default instead.
"""

import math
import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from debt_tracker.models.debt import LEGACY_TYPE_NAMES, DebtStatus, DebtType

_WHITESPACE_RE = re.compile(r"\s")
_NON_DIGIT_RE = re.compile(r"\D")
_DOT_DECIMAL_RE = re.compile(r"^\d*\.\d{1,2}$")
_PLAIN_NUMBER_RE = re.compile(r"^(\d+\.?\d*|\.\d+)$")


def sanitize_text(value: Any) -> str:
    """str() and strip; None becomes ""."""
    if value is None:
        return ""
    return str(value).strip()


def parse_money_to_cents(value: Any) -> Optional[int]:
    """
    Parse a localized amount into cents.

    Accepted forms:
        "1200,50"   -> 120050   (comma decimal)
        "1.200,50"  -> 120050   (dot thousands, comma decimal)
        "1200.50"   -> 120050   (single dot followed by 1-2 digits)
        "1.200"     -> 120000   (dot thousands)
        "1200,"     -> 120000   (trailing separator)
        ",50"       -> 50       (leading separator)
        "R$ 10"     -> None     (anything but digits and separators)

    Returns None for empty, negative or unparseable input.
    """
    raw = _WHITESPACE_RE.sub("", sanitize_text(value))
    if not raw:
        return None

    if "," in raw:
        if raw.count(",") > 1:
            return None
        raw = raw.replace(".", "").replace(",", ".")
    elif not _DOT_DECIMAL_RE.match(raw):
        raw = raw.replace(".", "")

    if not _PLAIN_NUMBER_RE.match(raw):
        return None

    try:
        cents = (Decimal(raw) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None
    return int(cents)


def extract_last4(value: Any) -> Optional[str]:
    """
    Keep only the last four digits of a card number.

    Non-digits are discarded first. Fewer than four digits yields None,
    so a partial number is never stored either.
    """
    digits = _NON_DIGIT_RE.sub("", sanitize_text(value))
    if len(digits) < 4:
        return None
    return digits[-4:]


def parse_installments(value: Any) -> int:
    """Installment count, 1 when absent, invalid or below 1."""
    if isinstance(value, bool):
        return 1
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return 1
        return max(1, int(value))
    text = sanitize_text(value)
    if not text:
        return 1
    try:
        number = float(text.replace(",", "."))
    except ValueError:
        return 1
    if not math.isfinite(number):
        return 1
    return max(1, int(number))


def parse_iso_date(value: Any) -> Optional[date]:
    """
    Parse a YYYY-MM-DD date.

    Empty input means "no date" and returns None.

    Raises:
        ValueError: If the input is non-empty and not a valid ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = sanitize_text(value)
    if not text:
        return None
    # Full timestamps keep only their date part
    if len(text) > 10 and text[10] == "T":
        text = text[:10]
    return date.fromisoformat(text)


def parse_status(value: Any) -> Optional[DebtStatus]:
    """Status from form text; None if not a known status."""
    try:
        return DebtStatus(sanitize_text(value).lower())
    except ValueError:
        return None


def parse_type(value: Any) -> Optional[DebtType]:
    """Debt type from form text, legacy names included; None if unknown."""
    text = sanitize_text(value).lower()
    if text in LEGACY_TYPE_NAMES:
        return LEGACY_TYPE_NAMES[text]
    try:
        return DebtType(text)
    except ValueError:
        return None


# =============================================================================
# LENIENT NORMALIZERS (import path)
# =============================================================================

def normalize_amount_cents(value: Any) -> int:
    """Imported amount: a finite non-negative number, else 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    if value < 0:
        return 0
    return int(round(value))


def normalize_status(value: Any) -> DebtStatus:
    """Imported status: anything but "paid" is open."""
    return DebtStatus.PAID if parse_status(value) is DebtStatus.PAID else DebtStatus.OPEN


def normalize_type(value: Any) -> DebtType:
    """Imported type: unknown values become OTHER."""
    return parse_type(value) or DebtType.OTHER


def normalize_due_date(value: Any) -> Optional[date]:
    """Imported due date: invalid values are dropped."""
    try:
        return parse_iso_date(value)
    except (TypeError, ValueError):
        return None
