"""
Main Orchestrator for spendlog

This module ties the components together and defines the two
end-to-end flows:
1. Append (raw input → validate → initialize ledger if new → load → add → rewrite)
2. Summary (filter input → load → filter/aggregate → render)

DESIGN DECISION: The flows own the error boundary.
Every LedgerError is audited and then re-raised unchanged; nothing is
retried and nothing is half-printed. Front-ends (CLI, Streamlit) decide
how to show the error.
"""

from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional, Union
from uuid import UUID

from spendlog.audit import AuditLogger
from spendlog.config import LedgerSettings, get_settings
from spendlog.models.transaction import SpendingSummary, TransactionRecord
from spendlog.queries import (
    InvalidFilterError,
    SummaryExecutor,
    SummaryPresenter,
    TransactionFilter,
)
from spendlog.services.storage import (
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    StorageError,
)
from spendlog.validation import InvalidInputError, TransactionBuilder


TERMINATION_NOTICE = "{command} terminating prematurely"


def describe_error(error: Exception, command: str) -> list[str]:
    """
    The two lines shown for any failed command.

    Example:
        ["StoreReadError: Ledger file not found: GeneralLedger.json",
         "summary terminating prematurely"]
    """
    return [
        f"{type(error).__name__}: {error}",
        TERMINATION_NOTICE.format(command=command),
    ]


class AppendTransactionFlow:
    """
    Orchestrates recording a new transaction.

    Flow:
    1. Build → validate raw input into a TransactionRecord
    2. Initialize → create an empty ledger if none exists yet
    3. Append → load the ledger, add the record, rewrite the file

    Step 3 is not atomic across processes: two concurrent appends
    both rewrite the file and the later one wins.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        builder: Optional[TransactionBuilder] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._builder = builder or TransactionBuilder()
        self._audit_logger = audit_logger or AuditLogger()

    def append(
        self,
        raw: Mapping[str, Optional[str]],
        now: Optional[datetime] = None,
    ) -> tuple[TransactionRecord, int]:
        """
        Validate and store a transaction.

        Returns:
            (record, record_count_after_append)

        Raises:
            InvalidInputError: If the input is malformed (nothing is written)
            StorageError: If the ledger cannot be read or written
        """
        try:
            record = self._builder.build(raw, now=now)
        except InvalidInputError as e:
            self._audit_logger.log_input_rejected(str(e))
            raise

        try:
            if self._storage.initialize_empty():
                self._audit_logger.log_ledger_initialized(self._storage.location)
            record_count = self._storage.append(record)
        except StorageError as e:
            self._audit_logger.log_storage_error(
                error_type=type(e).__name__,
                error_message=str(e),
                ledger_path=self._storage.location,
            )
            raise

        self._audit_logger.log_transaction_appended(
            name=record.name,
            category=record.category,
            amount=str(record.amount),
            record_count=record_count,
        )
        return record, record_count


class SummaryFlow:
    """
    Orchestrates a spending summary.

    A missing ledger is an error here: only the append flow creates one.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        presenter: Optional[SummaryPresenter] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._executor = SummaryExecutor(storage)
        self._presenter = presenter or SummaryPresenter()
        self._audit_logger = audit_logger or AuditLogger()

    def summarize(
        self,
        category: Optional[str] = None,
        interval: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> SpendingSummary:
        """
        Build the filter and aggregate the ledger.

        Raises:
            InvalidFilterError: If the category or interval is malformed
            StorageError: If the ledger is missing, unreadable or corrupt
        """
        try:
            transaction_filter = TransactionFilter.build(
                category=category,
                interval=interval,
                now=now,
            )
        except InvalidFilterError as e:
            self._audit_logger.log_filter_rejected(str(e))
            raise

        try:
            summary = self._executor.execute(transaction_filter)
        except StorageError as e:
            self._audit_logger.log_storage_error(
                error_type=type(e).__name__,
                error_message=str(e),
                ledger_path=self._storage.location,
            )
            raise

        summary.correlation_id = str(self._audit_logger.correlation_id)
        self._audit_logger.log_ledger_loaded(
            ledger_path=self._storage.location,
            record_count=summary.scanned_count,
        )
        self._audit_logger.log_summary_generated(
            filters=summary.filter_description,
            category_count=len(summary.categories),
            matched_count=summary.record_count,
            scanned_count=summary.scanned_count,
        )
        return summary

    def render(self, summary: SpendingSummary) -> str:
        return self._presenter.render_summary(summary)

    def report(
        self,
        category: Optional[str] = None,
        interval: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """Summarize and render in one step."""
        return self.render(self.summarize(category=category, interval=interval, now=now))


def create_app_components(
    ledger_path: Optional[Union[str, Path]] = None,
    settings: Optional[LedgerSettings] = None,
    correlation_id: Optional[UUID] = None,
) -> tuple[AppendTransactionFlow, SummaryFlow, LedgerStorageInterface]:
    """
    Factory function to create all application components.

    Args:
        ledger_path: Ledger file to use instead of the configured one
        settings: Settings to use instead of the cached environment settings
        correlation_id: ID shared by the audit events of this invocation

    Returns:
        (append_flow, summary_flow, storage)
    """
    settings = settings or get_settings()
    storage = JsonFileLedgerStorage(
        path=ledger_path if ledger_path is not None else settings.ledger_path,
        atomic_writes=settings.atomic_writes,
    )
    audit_logger = AuditLogger(correlation_id)

    append_flow = AppendTransactionFlow(
        storage=storage,
        audit_logger=audit_logger,
    )
    summary_flow = SummaryFlow(
        storage=storage,
        presenter=SummaryPresenter(settings),
        audit_logger=audit_logger,
    )
    return append_flow, summary_flow, storage
