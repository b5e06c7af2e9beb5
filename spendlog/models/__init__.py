"""
Data Models Package

This package contains all Pydantic models used in spendlog.
Everything read from or written to the ledger conforms to these schemas.
"""

from spendlog.models.transaction import (
    CategoryAccumulator,
    LedgerDocument,
    SpendingSummary,
    TransactionRecord,
    from_minor_units,
    to_minor_units,
)
from spendlog.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "CategoryAccumulator",
    "LedgerDocument",
    "SpendingSummary",
    "TransactionRecord",
    "from_minor_units",
    "to_minor_units",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
