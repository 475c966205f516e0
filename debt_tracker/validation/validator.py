"""
Two-Stage Form Validation

STAGE 1 - SCHEMA VALIDATION:
- Required fields present (title, type, amount, status)
- Formats parse (amount, due date)
- Errors here abort the operation

STAGE 2 - SEMANTIC VALIDATION:
- Suspiciously large amounts
- Card numbers too short to keep a last-4 from
- Warnings only; the operation still goes ahead

Stage 2 only runs when stage 1 passes.

IMPORTANT: Validation never mutates anything and never raises.
It reports issues per field for the form to display.
"""

from typing import Optional

from debt_tracker.config import get_settings
from debt_tracker.models.debt import (
    DebtEditForm,
    DebtForm,
    ValidationIssue,
    ValidationResult,
)
from debt_tracker.validation.parsers import (
    extract_last4,
    parse_iso_date,
    parse_money_to_cents,
    parse_status,
    parse_type,
    sanitize_text,
)


AMOUNT_EXAMPLE = "1200,50"


class DebtValidator:
    """Validates creation and edit forms."""

    def __init__(self, max_amount_cents: Optional[int] = None):
        """
        Args:
            max_amount_cents: Amounts above this raise a warning.
                              Defaults to the configured threshold.
        """
        if max_amount_cents is None:
            max_amount_cents = get_settings().app.max_amount_cents
        self._max_amount_cents = max_amount_cents

    # -------------------------------------------------------------------------
    # Field checks shared by both forms
    # -------------------------------------------------------------------------

    def _check_title(self, title: Optional[str], issues: list[ValidationIssue]) -> None:
        if not sanitize_text(title):
            issues.append(ValidationIssue(
                field="title",
                issue_type="missing",
                message="Enter a description.",
                severity="error",
            ))

    def _check_amount(self, amount: Optional[str], issues: list[ValidationIssue]) -> None:
        if parse_money_to_cents(amount) is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing" if not sanitize_text(amount) else "invalid_format",
                message=f"Enter a valid amount (e.g. {AMOUNT_EXAMPLE}).",
                severity="error",
            ))

    def _check_status(self, status: Optional[str], issues: list[ValidationIssue]) -> None:
        if parse_status(status) is None:
            issues.append(ValidationIssue(
                field="status",
                issue_type="missing" if not sanitize_text(status) else "invalid_value",
                message="Select a status.",
                severity="error",
            ))

    def _check_due_date(self, due_date: Optional[str], issues: list[ValidationIssue]) -> None:
        try:
            parse_iso_date(due_date)
        except ValueError:
            issues.append(ValidationIssue(
                field="due_date",
                issue_type="invalid_format",
                message="Enter the due date as YYYY-MM-DD.",
                severity="error",
            ))

    def _check_amount_size(self, amount: Optional[str], issues: list[ValidationIssue]) -> None:
        cents = parse_money_to_cents(amount)
        if cents is not None and cents > self._max_amount_cents:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message="This amount seems unusually high. Please double-check it.",
                severity="warning",
            ))

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    def _validate_create_schema(self, form: DebtForm) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        self._check_title(form.title, issues)
        if parse_type(form.type) is None:
            issues.append(ValidationIssue(
                field="type",
                issue_type="missing" if not sanitize_text(form.type) else "invalid_value",
                message="Select a type.",
                severity="error",
            ))
        self._check_amount(form.amount, issues)
        self._check_status(form.status, issues)
        self._check_due_date(form.due_date, issues)
        return issues

    def _validate_create_semantic(self, form: DebtForm) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        self._check_amount_size(form.amount, issues)
        if sanitize_text(form.card_number) and extract_last4(form.card_number) is None:
            issues.append(ValidationIssue(
                field="card_number",
                issue_type="ignored",
                message="Card number has fewer than 4 digits and was not saved.",
                severity="warning",
            ))
        return issues

    def _validate_edit_schema(self, form: DebtEditForm) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        self._check_title(form.title, issues)
        self._check_amount(form.amount, issues)
        self._check_status(form.status, issues)
        self._check_due_date(form.due_date, issues)
        return issues

    def _validate_edit_semantic(self, form: DebtEditForm) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        self._check_amount_size(form.amount, issues)
        return issues

    @staticmethod
    def _result(
        schema_issues: list[ValidationIssue],
        semantic_issues: list[ValidationIssue],
    ) -> ValidationResult:
        all_issues = schema_issues + semantic_issues
        return ValidationResult(
            is_valid=not any(issue.severity == "error" for issue in all_issues),
            issues=all_issues,
            warnings=[issue.message for issue in all_issues if issue.severity == "warning"],
        )

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def validate_create(self, form: DebtForm) -> ValidationResult:
        """Validate the creation form."""
        schema_issues = self._validate_create_schema(form)
        semantic_issues: list[ValidationIssue] = []
        if not schema_issues:
            semantic_issues = self._validate_create_semantic(form)
        return self._result(schema_issues, semantic_issues)

    def validate_edit(self, form: DebtEditForm) -> ValidationResult:
        """Validate the edit form."""
        schema_issues = self._validate_edit_schema(form)
        semantic_issues: list[ValidationIssue] = []
        if not schema_issues:
            semantic_issues = self._validate_edit_semantic(form)
        return self._result(schema_issues, semantic_issues)

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """One-line message for the status area above the form."""
        if result.is_valid and not result.warnings:
            return "All fields look good."
        if not result.is_valid:
            return "Please review the required fields."
        return " ".join(result.warnings)
