"""
Store Event Models

Every mutation of the debt store, and every failure the store recovers
from, is described by a StoreEvent and written to the structured log.

Events are log lines only. They are not persisted and cannot be replayed.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class StoreEventType(str, Enum):
    """Types of events the store emits."""
    # Mutations
    DEBT_CREATED = "debt_created"
    DEBT_UPDATED = "debt_updated"
    STATUS_TOGGLED = "status_toggled"
    DEBT_DELETED = "debt_deleted"
    STORE_CLEARED = "store_cleared"

    # Backup
    IMPORT_COMPLETED = "import_completed"
    IMPORT_CANCELLED = "import_cancelled"
    IMPORT_REJECTED = "import_rejected"
    EXPORT_CREATED = "export_created"

    # Rejections and recoveries
    VALIDATION_FAILED = "validation_failed"
    ACTION_DECLINED = "action_declined"
    STORAGE_READ_FAILED = "storage_read_failed"
    STORAGE_WRITE_FAILED = "storage_write_failed"


class EventSeverity(str, Enum):
    """Severity level for store events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoreEvent(BaseModel):
    """A single store event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )
    event_type: StoreEventType
    severity: EventSeverity = EventSeverity.INFO
    debt_id: Optional[str] = Field(
        default=None,
        description="ID of the debt this event relates to"
    )
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "debt_id": self.debt_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class StoreEventBuilder:
    """
    Helper class to build store events with common patterns.

    Usage:
        event = StoreEventBuilder.debt_created(debt_id, title, amount_cents)
        event = StoreEventBuilder.import_completed(record_count, skipped_count)
    """

    @staticmethod
    def debt_created(debt_id: str, title: str, amount_cents: int) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.DEBT_CREATED,
            debt_id=debt_id,
            description="Debt created",
            details={"title": title, "amount_cents": amount_cents},
        )

    @staticmethod
    def debt_updated(debt_id: str, changed_fields: list[str]) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.DEBT_UPDATED,
            debt_id=debt_id,
            description=f"Debt updated ({len(changed_fields)} fields changed)",
            details={"changed_fields": changed_fields},
        )

    @staticmethod
    def status_toggled(debt_id: str, status: str) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.STATUS_TOGGLED,
            debt_id=debt_id,
            description=f"Debt marked as {status}",
            details={"status": status},
        )

    @staticmethod
    def debt_deleted(debt_id: str) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.DEBT_DELETED,
            debt_id=debt_id,
            description="Debt deleted",
        )

    @staticmethod
    def store_cleared(removed_count: int) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.STORE_CLEARED,
            description=f"All debts cleared ({removed_count} removed)",
            details={"removed_count": removed_count},
        )

    @staticmethod
    def import_completed(record_count: int, skipped_count: int) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.IMPORT_COMPLETED,
            description=f"Backup imported: {record_count} debts",
            details={
                "record_count": record_count,
                "skipped_count": skipped_count,
            },
        )

    @staticmethod
    def import_cancelled(record_count: int) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.IMPORT_CANCELLED,
            description="Import cancelled by user",
            details={"record_count": record_count},
        )

    @staticmethod
    def import_rejected(error_message: str) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.IMPORT_REJECTED,
            severity=EventSeverity.WARNING,
            description="Import rejected: invalid backup format",
            error_message=error_message,
        )

    @staticmethod
    def export_created(record_count: int, filename: Optional[str] = None) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.EXPORT_CREATED,
            description=f"Backup exported: {record_count} debts",
            details={
                "record_count": record_count,
                "filename": filename,
            },
        )

    @staticmethod
    def validation_failed(
        operation: str,
        issues: list[dict],
        debt_id: Optional[str] = None,
    ) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.VALIDATION_FAILED,
            severity=EventSeverity.WARNING,
            debt_id=debt_id,
            description=f"{operation.capitalize()} rejected with {len(issues)} issues",
            details={
                "operation": operation,
                "issues": issues,
            },
        )

    @staticmethod
    def action_declined(action: str, debt_id: Optional[str] = None) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.ACTION_DECLINED,
            debt_id=debt_id,
            description=f"User declined to {action}",
            details={"action": action},
        )

    @staticmethod
    def storage_read_failed(key: str, error_message: str) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.STORAGE_READ_FAILED,
            severity=EventSeverity.WARNING,
            description="Stored debts unreadable, starting empty",
            details={"key": key},
            error_message=error_message,
        )

    @staticmethod
    def storage_write_failed(key: str, error_message: str) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.STORAGE_WRITE_FAILED,
            severity=EventSeverity.ERROR,
            description="Could not persist debts",
            details={"key": key},
            error_message=error_message,
        )
