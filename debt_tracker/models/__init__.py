"""
Data Models Package

This package contains all Pydantic models used by the Debt Tracker.
"""

from debt_tracker.models.debt import (
    LEGACY_TYPE_NAMES,
    DashboardSummary,
    DebtEditForm,
    DebtForm,
    DebtRecord,
    DebtStatus,
    DebtType,
    ExportPayload,
    ImportResult,
    ImportStatus,
    SortKey,
    StatusFilter,
    ValidationIssue,
    ValidationResult,
    ViewQuery,
)
from debt_tracker.models.events import (
    EventSeverity,
    StoreEvent,
    StoreEventBuilder,
    StoreEventType,
)

__all__ = [
    # Debt models
    "LEGACY_TYPE_NAMES",
    "DashboardSummary",
    "DebtEditForm",
    "DebtForm",
    "DebtRecord",
    "DebtStatus",
    "DebtType",
    "ExportPayload",
    "ImportResult",
    "ImportStatus",
    "SortKey",
    "StatusFilter",
    "ValidationIssue",
    "ValidationResult",
    "ViewQuery",
    # Event models
    "EventSeverity",
    "StoreEvent",
    "StoreEventBuilder",
    "StoreEventType",
]
