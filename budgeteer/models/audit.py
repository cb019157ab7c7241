"""
Audit Models for Budgeteer

Every change to a user's expenses, and every read from the remote store,
is logged for audit purposes. This provides:
1. Traceability of edits and deletions
2. Debugging information when the store misbehaves
3. A record of rejected (invalid) submissions

DESIGN DECISION: Audit events are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Store reads
    EXPENSES_LOADED = "expenses_loaded"
    PROFILE_LOADED = "profile_loaded"

    # Validation
    VALIDATION_FAILED = "validation_failed"

    # Persistence
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"

    # Aggregation
    SUMMARY_COMPUTED = "summary_computed"

    # System events
    SYSTEM_ERROR = "system_error"
    STORE_ERROR = "store_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'user', 'summary')"
    )
    entity_id: Optional[str] = None
    owner_id: Optional[str] = None

    # For tracking related events
    correlation_id: Optional[UUID] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None
    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "owner_id": self.owner_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, owner_id, amount, correlation_id)
    """

    @staticmethod
    def expenses_loaded(
        owner_id: str,
        count: int,
        skipped: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_LOADED,
            severity=AuditSeverity.WARNING if skipped else AuditSeverity.INFO,
            entity_type="user",
            entity_id=owner_id,
            owner_id=owner_id,
            correlation_id=correlation_id,
            description=f"Loaded {count} expenses",
            details={"count": count, "skipped_foreign": skipped},
        )

    @staticmethod
    def profile_loaded(
        owner_id: str,
        found: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROFILE_LOADED,
            severity=AuditSeverity.INFO if found else AuditSeverity.WARNING,
            entity_type="user",
            entity_id=owner_id,
            owner_id=owner_id,
            correlation_id=correlation_id,
            description="Profile loaded" if found else "Profile missing, using default budget",
            details={"found": found},
        )

    @staticmethod
    def validation_failed(
        owner_id: str,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            owner_id=owner_id,
            correlation_id=correlation_id,
            description=f"Expense rejected with {len(issues)} issue(s)",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def expense_added(
        expense_id: str,
        owner_id: str,
        amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            owner_id=owner_id,
            correlation_id=correlation_id,
            description="Expense added",
            details={"amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def expense_updated(
        expense_id: str,
        owner_id: str,
        changed_fields: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            entity_type="expense",
            entity_id=expense_id,
            owner_id=owner_id,
            correlation_id=correlation_id,
            description="Expense updated",
            details={"changed_fields": changed_fields},
            is_user_action=True,
        )

    @staticmethod
    def expense_deleted(
        expense_id: str,
        owner_id: Optional[str],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            owner_id=owner_id,
            correlation_id=correlation_id,
            description="Expense deleted",
            is_user_action=True,
        )

    @staticmethod
    def summary_computed(
        owner_id: str,
        year: int,
        month: int,
        expense_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUMMARY_COMPUTED,
            severity=AuditSeverity.DEBUG,
            entity_type="summary",
            owner_id=owner_id,
            correlation_id=correlation_id,
            description=f"Summary computed for {year:04d}-{month:02d}",
            details={"year": year, "month": month, "expense_count": expense_count},
        )

    @staticmethod
    def store_error(
        operation: str,
        error_message: str,
        owner_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_ERROR,
            severity=AuditSeverity.ERROR,
            entity_type="store",
            owner_id=owner_id,
            correlation_id=correlation_id,
            description=f"Remote store error during {operation}",
            details={"operation": operation},
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"System error: {error_type}",
            details=details or {},
            error_message=error_message,
        )
