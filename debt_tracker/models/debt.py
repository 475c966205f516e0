"""
Core Data Models for Debt Tracker

These models define the schemas for every piece of data the tracker handles:
1. The persisted debt record (camelCase on disk, snake_case in Python)
2. Raw form input as it arrives from the presentation layer
3. Validation results reported back per field
4. View queries, dashboard figures and the backup payload

DESIGN DECISION: A DebtRecord is treated as an immutable value.
Edits produce a new record via model_copy() and a new collection is
committed to the store as a whole.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class DebtType(str, Enum):
    """
    Kind of obligation a debt record represents.

    Older backups carry the Portuguese names (cartao, boleto, emprestimo,
    outro); see LEGACY_TYPE_NAMES.
    """
    CARD = "card"
    BILL = "bill"
    LOAN = "loan"
    OTHER = "other"


LEGACY_TYPE_NAMES = {
    "cartao": DebtType.CARD,
    "boleto": DebtType.BILL,
    "emprestimo": DebtType.LOAN,
    "outro": DebtType.OTHER,
}


class DebtStatus(str, Enum):
    """Lifecycle state of a debt. Only ever toggled between the two."""
    OPEN = "open"
    PAID = "paid"

    def toggled(self) -> "DebtStatus":
        return DebtStatus.OPEN if self is DebtStatus.PAID else DebtStatus.PAID


class StatusFilter(str, Enum):
    """Status filter applied by the view pipeline."""
    ALL = "all"
    OPEN = "open"
    PAID = "paid"


class SortKey(str, Enum):
    """Sort orders understood by the view pipeline."""
    CREATED_AT_DESC = "createdAtDesc"
    AMOUNT_DESC = "amountDesc"
    DUE_DATE_ASC = "dueDateAsc"


# =============================================================================
# CORE DEBT MODEL
# =============================================================================

class DebtRecord(BaseModel):
    """
    A single user-entered obligation.

    Field names are snake_case in Python and camelCase in the persisted
    JSON, so blobs written by older versions of the tracker load as-is.

    CRITICAL: card_last4 is either exactly four digits or None.
    A full card number must never reach this model.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        str_strip_whitespace=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier, immutable"
    )
    title: str = Field(
        ...,
        min_length=1,
        description="Short description of the debt"
    )
    type: DebtType = Field(
        ...,
        description="Kind of debt"
    )
    amount_cents: int = Field(
        ...,
        ge=0,
        alias="amountCents",
        description="Amount in cents"
    )
    due_date: Optional[date] = Field(
        default=None,
        alias="dueDate",
        description="Due date, None when the debt has no due date"
    )
    installments: int = Field(
        default=1,
        ge=1,
        description="Number of installments (descriptive only)"
    )
    status: DebtStatus = Field(
        default=DebtStatus.OPEN,
        description="open or paid"
    )
    card_last4: Optional[str] = Field(
        default=None,
        alias="cardLast4",
        pattern=r"^\d{4}$",
        description="Last four digits of the card, never the full number"
    )
    notes: str = Field(
        default="",
        description="Free-form notes"
    )
    created_at: str = Field(
        ...,
        min_length=1,
        alias="createdAt",
        description="ISO timestamp of creation, used as a sort key"
    )

    @field_validator("type", mode="before")
    @classmethod
    def map_legacy_type(cls, v):
        if isinstance(v, str) and v.lower() in LEGACY_TYPE_NAMES:
            return LEGACY_TYPE_NAMES[v.lower()]
        return v

    @field_validator("notes", mode="before")
    @classmethod
    def none_notes_to_empty(cls, v):
        return "" if v is None else v

    @property
    def search_text(self) -> str:
        """Lower-cased haystack used by the search filter."""
        return f"{self.title} {self.notes}".lower()

    def to_storage_dict(self) -> dict:
        """Serialize with the persisted camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# FORM INPUT MODELS
# =============================================================================

class DebtForm(BaseModel):
    """
    Raw values from the creation form.

    Everything is text exactly as typed; parsing and validation happen
    in the validator, not here.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: Optional[str] = None
    type: Optional[str] = None
    amount: Optional[str] = None
    due_date: Optional[str] = None
    installments: Optional[str] = None
    status: Optional[str] = None
    card_number: Optional[str] = None
    notes: Optional[str] = None


class DebtEditForm(BaseModel):
    """
    Raw values from the edit dialog.

    Type, installments and card are not editable after creation.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: Optional[str] = None
    amount: Optional[str] = None
    due_date: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Form field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'suspicious_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of validating a form.

    Errors block the operation; warnings are reported but do not.
    """

    is_valid: bool = Field(
        ...,
        description="True when no error-level issue was found"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    def errors_by_field(self) -> dict[str, str]:
        """First error message per field, for showing next to form inputs."""
        errors: dict[str, str] = {}
        for issue in self.issues:
            if issue.severity == "error" and issue.field not in errors:
                errors[issue.field] = issue.message
        return errors


# =============================================================================
# VIEW MODELS
# =============================================================================

class ViewQuery(BaseModel):
    """
    Parameters of one projection of the debt list.

    Unknown filter values fall back to ALL, unknown sort keys to None
    (insertion order), so a stale UI value never raises.
    """

    search_text: str = Field(
        default="",
        description="Case-insensitive substring matched against title and notes"
    )
    status_filter: StatusFilter = Field(
        default=StatusFilter.ALL,
        description="Status filter"
    )
    sort_key: Optional[SortKey] = Field(
        default=None,
        description="Sort order, None keeps insertion order"
    )

    @field_validator("search_text", mode="before")
    @classmethod
    def none_search_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("status_filter", mode="before")
    @classmethod
    def coerce_status_filter(cls, v):
        try:
            return StatusFilter(v)
        except ValueError:
            return StatusFilter.ALL

    @field_validator("sort_key", mode="before")
    @classmethod
    def coerce_sort_key(cls, v):
        if v is None:
            return None
        try:
            return SortKey(v)
        except ValueError:
            return None


class DashboardSummary(BaseModel):
    """Aggregate figures shown on the dashboard."""

    open_total_cents: int = Field(
        default=0,
        ge=0,
        description="Sum of amounts across open debts"
    )
    open_count: int = Field(default=0, ge=0)
    paid_count: int = Field(default=0, ge=0)
    next_due: Optional[DebtRecord] = Field(
        default=None,
        description="Open debt with the earliest due date, if any has one"
    )

    @property
    def has_upcoming_due(self) -> bool:
        return self.next_due is not None


# =============================================================================
# BACKUP MODELS
# =============================================================================

class ExportPayload(BaseModel):
    """
    Backup document written by export and accepted by import.

    Shape on disk: {"version": 1, "exportedAt": "...", "debts": [...]}
    """
    model_config = ConfigDict(populate_by_name=True)

    version: int = Field(
        default=1,
        ge=1,
        description="Backup format version"
    )
    exported_at: str = Field(
        ...,
        alias="exportedAt",
        description="ISO timestamp of the export"
    )
    debts: list[DebtRecord] = Field(default_factory=list)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ImportStatus(str, Enum):
    """Outcome of an import that passed the format check."""
    IMPORTED = "imported"
    CANCELLED = "cancelled"


class ImportResult(BaseModel):
    """Result of import_replace."""

    status: ImportStatus
    record_count: int = Field(
        ...,
        ge=0,
        description="Records that survived normalization"
    )
    skipped_count: int = Field(
        default=0,
        ge=0,
        description="Entries dropped (not an object, or no title)"
    )

    @property
    def imported(self) -> bool:
        return self.status is ImportStatus.IMPORTED
