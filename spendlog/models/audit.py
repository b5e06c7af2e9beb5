"""
Audit Models for spendlog

Every ledger command emits audit events so a run can be traced after
the fact: which file was touched, what was appended, which filters
produced which summary, and why a command gave up.

DESIGN DECISION: Audit events are only logged, never stored in the
ledger file. The ledger format stays exactly {"items": [...]}.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Persistence
    LEDGER_INITIALIZED = "ledger_initialized"
    LEDGER_LOADED = "ledger_loaded"
    TRANSACTION_APPENDED = "transaction_appended"

    # Summaries
    SUMMARY_GENERATED = "summary_generated"

    # Rejections
    INPUT_REJECTED = "input_rejected"
    FILTER_REJECTED = "filter_rejected"

    # Failures
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation - all events of one command invocation share this
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate events of a single invocation"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_type: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_type": self.error_type,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_appended(
            "Coffee", "Food", "3.50", 4, correlation_id
        )
    """

    @staticmethod
    def ledger_initialized(
        ledger_path: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_INITIALIZED,
            correlation_id=correlation_id,
            description=f"Created empty ledger at {ledger_path}",
            details={"ledger_path": ledger_path},
        )

    @staticmethod
    def ledger_loaded(
        ledger_path: str,
        record_count: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Loaded {record_count} records",
            details={
                "ledger_path": ledger_path,
                "record_count": record_count,
            },
        )

    @staticmethod
    def transaction_appended(
        name: str,
        category: str,
        amount: str,
        record_count: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_APPENDED,
            correlation_id=correlation_id,
            description=f"Appended '{name}' to category '{category}'",
            details={
                "name": name,
                "category": category,
                "amount": amount,
                "record_count": record_count,
            },
        )

    @staticmethod
    def summary_generated(
        filters: list[str],
        category_count: int,
        matched_count: int,
        scanned_count: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUMMARY_GENERATED,
            correlation_id=correlation_id,
            description=f"Summarized {matched_count} of {scanned_count} records",
            details={
                "filters": filters,
                "category_count": category_count,
                "matched_count": matched_count,
                "scanned_count": scanned_count,
            },
        )

    @staticmethod
    def input_rejected(
        error_message: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INPUT_REJECTED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description="Transaction input rejected",
            error_type="InvalidInputError",
            error_message=error_message,
        )

    @staticmethod
    def filter_rejected(
        error_message: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FILTER_REJECTED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description="Summary filter rejected",
            error_type="InvalidFilterError",
            error_message=error_message,
        )

    @staticmethod
    def storage_error(
        error_type: str,
        error_message: str,
        ledger_path: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Ledger storage failed: {error_type}",
            details={"ledger_path": ledger_path},
            error_type=error_type,
            error_message=error_message,
        )
