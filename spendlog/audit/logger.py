"""
Audit Logger

DESIGN DECISION: Every significant action in the system is logged.
This provides:
1. Traceability of every append and summary
2. Debugging capability when a ledger file goes bad
3. Correlation IDs to tie the events of one invocation together

Logs go to stderr so the report printed on stdout stays clean.
The level defaults to WARNING, so a normal run prints only its report.
"""

import logging
import sys
from typing import Optional, TextIO
from uuid import UUID, uuid4

import structlog

from spendlog.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def configure_logging(
    level: str = "WARNING",
    fmt: str = "console",
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure structlog for the process.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ...)
        fmt: "console" for human-readable lines, "json" for one JSON object per line
        stream: Where to write; defaults to stderr
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Turns AuditEvents into structured log lines at the matching level.
    """

    def __init__(self, correlation_id: Optional[UUID] = None):
        """
        Initialize audit logger.

        Args:
            correlation_id: ID shared by all events of this invocation.
                            A new one is created if omitted.
        """
        self.correlation_id = correlation_id or create_correlation_id()
        self._logger = structlog.get_logger("spendlog")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level its severity asks for."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_ledger_initialized(self, ledger_path: str) -> None:
        """Log creation of a new, empty ledger."""
        self.log(AuditEventBuilder.ledger_initialized(
            ledger_path=ledger_path,
            correlation_id=self.correlation_id,
        ))

    def log_ledger_loaded(self, ledger_path: str, record_count: int) -> None:
        self.log(AuditEventBuilder.ledger_loaded(
            ledger_path=ledger_path,
            record_count=record_count,
            correlation_id=self.correlation_id,
        ))

    def log_transaction_appended(
        self,
        name: str,
        category: str,
        amount: str,
        record_count: int,
    ) -> None:
        """Log a successful append."""
        self.log(AuditEventBuilder.transaction_appended(
            name=name,
            category=category,
            amount=amount,
            record_count=record_count,
            correlation_id=self.correlation_id,
        ))

    def log_summary_generated(
        self,
        filters: list[str],
        category_count: int,
        matched_count: int,
        scanned_count: int,
    ) -> None:
        """Log summary generation."""
        self.log(AuditEventBuilder.summary_generated(
            filters=filters,
            category_count=category_count,
            matched_count=matched_count,
            scanned_count=scanned_count,
            correlation_id=self.correlation_id,
        ))

    def log_input_rejected(self, error_message: str) -> None:
        self.log(AuditEventBuilder.input_rejected(
            error_message=error_message,
            correlation_id=self.correlation_id,
        ))

    def log_filter_rejected(self, error_message: str) -> None:
        self.log(AuditEventBuilder.filter_rejected(
            error_message=error_message,
            correlation_id=self.correlation_id,
        ))

    def log_storage_error(
        self,
        error_type: str,
        error_message: str,
        ledger_path: str,
    ) -> None:
        """Log a failed ledger read or write."""
        self.log(AuditEventBuilder.storage_error(
            error_type=error_type,
            error_message=error_message,
            ledger_path=ledger_path,
            correlation_id=self.correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a command invocation and pass it
    through all subsequent operations.
    """
    return uuid4()
