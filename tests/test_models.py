"""
Tests for spendlog models

Test strategy:
1. Unit tests for individual components (models, filters, builder)
2. Flow tests against real files in tmp_path and in-memory storage
3. CLI tests through typer's CliRunner
"""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

from pydantic import ValidationError

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


class TestTransactionRecord:
    """Tests for the TransactionRecord model."""

    def test_record_creation(self, make_record):
        record = make_record()
        assert record.name == "Coffee"
        assert record.category == "Food"
        assert record.amount == Decimal("3.50")

    def test_category_is_not_normalized(self, make_record):
        """Whitespace and case are part of the category."""
        record = make_record(category=" food ")
        assert record.category == " food "

    def test_rejects_negative_amount(self):
        with pytest.raises(ValidationError):
            TransactionRecord(
                name="Refund",
                category="Food",
                amount=Decimal("-1.00"),
                timestamp=datetime.now(timezone.utc),
            )

    def test_rejects_amount_a_json_number_cannot_hold(self):
        with pytest.raises(ValidationError):
            TransactionRecord(
                name="Yacht",
                category="Toys",
                amount=Decimal("12345678901234567.89"),
                timestamp=datetime.now(timezone.utc),
            )

    def test_rejects_missing_field(self):
        with pytest.raises(ValidationError):
            TransactionRecord.model_validate(
                {"name": "Coffee", "amount": 3.5, "timestamp": "2024-03-01T10:00:00Z"}
            )

    def test_rejects_empty_name(self):
        with pytest.raises(ValidationError):
            TransactionRecord(
                name="",
                category="Food",
                amount=Decimal("1"),
                timestamp=datetime.now(timezone.utc),
            )

    def test_record_is_immutable(self, make_record):
        record = make_record()
        with pytest.raises(ValidationError):
            record.amount = Decimal("9.99")

    def test_float_amount_keeps_its_decimal_text(self):
        """0.1 must become Decimal('0.1'), not 0.1000000000000000055..."""
        record = TransactionRecord(
            name="Gum",
            category="Food",
            amount=0.1,
            timestamp=datetime.now(timezone.utc),
        )
        assert record.amount == Decimal("0.1")
        assert record.amount_minor_units == 10

    def test_naive_timestamp_is_read_as_utc(self):
        record = TransactionRecord.model_validate({
            "name": "Bus",
            "category": "Transit",
            "amount": 2.25,
            "timestamp": "2024-03-01T10:00:00",
        })
        assert record.timestamp == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)

    def test_iso_z_timestamp_is_parsed(self):
        record = TransactionRecord.model_validate({
            "name": "Bus",
            "category": "Transit",
            "amount": 2.25,
            "timestamp": "2024-03-01T10:00:00.000Z",
        })
        assert record.timestamp.utcoffset() == timedelta(0)

    def test_to_ledger_dict_writes_number_amount(self, make_record):
        data = make_record(amount="3.50").to_ledger_dict()
        assert data["amount"] == 3.5
        assert isinstance(data["amount"], float)
        assert data["timestamp"] == "2024-03-15T12:00:00+00:00"


class TestMinorUnits:
    """Tests for cent conversion."""

    @pytest.mark.parametrize("amount,expected", [
        ("0", 0),
        ("3.5", 350),
        ("2.25", 225),
        ("0.105", 11),
        ("0.104", 10),
        ("100", 10000),
    ])
    def test_to_minor_units(self, amount, expected):
        assert to_minor_units(Decimal(amount)) == expected

    def test_from_minor_units(self):
        assert from_minor_units(500) == Decimal("5.00")
        assert str(from_minor_units(7)) == "0.07"


class TestCategoryAccumulator:
    """Tests for the per-category accumulator."""

    def test_starts_empty(self):
        acc = CategoryAccumulator(category="Food")
        assert acc.total_minor_units == 0
        assert acc.items == []

    def test_add_tallies_and_keeps_order(self, make_record):
        acc = CategoryAccumulator(category="Food")
        first = make_record(name="Coffee", amount="3.50")
        second = make_record(name="Bagel", amount="2.10")
        acc.add(first)
        acc.add(second)
        assert acc.total_minor_units == 560
        assert acc.total == Decimal("5.60")
        assert [item.name for item in acc.items] == ["Coffee", "Bagel"]
        assert acc.item_count == 2


class TestLedgerAndSummary:
    """Tests for the ledger document and summary containers."""

    def test_ledger_document_shape(self, make_record):
        doc = LedgerDocument(items=[make_record()])
        data = doc.to_ledger_dict()
        assert list(data) == ["items"]
        assert data["items"][0]["name"] == "Coffee"

    def test_empty_summary(self):
        summary = SpendingSummary()
        assert summary.is_empty is True
        assert summary.record_count == 0
        assert summary.grand_total_minor_units == 0

    def test_summary_totals(self, make_record):
        food = CategoryAccumulator(category="Food")
        food.add(make_record(amount="3.50"))
        transit = CategoryAccumulator(category="Transit")
        transit.add(make_record(category="Transit", amount="2.25"))
        summary = SpendingSummary(categories={"Food": food, "Transit": transit})
        assert summary.is_empty is False
        assert summary.record_count == 2
        assert summary.grand_total_minor_units == 575


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        event = AuditEvent(
            event_type=AuditEventType.LEDGER_INITIALIZED,
            description="Created ledger",
        )
        assert event.event_type == AuditEventType.LEDGER_INITIALIZED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        event = AuditEvent(
            event_type=AuditEventType.TRANSACTION_APPENDED,
            description="Appended",
            details={"name": "Coffee", "amount": "3.50"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "transaction_appended"
        assert log_dict["details"]["name"] == "Coffee"

    def test_builder_transaction_appended(self):
        correlation_id = uuid4()
        event = AuditEventBuilder.transaction_appended(
            name="Coffee",
            category="Food",
            amount="3.50",
            record_count=4,
            correlation_id=correlation_id,
        )
        assert event.event_type == AuditEventType.TRANSACTION_APPENDED
        assert event.correlation_id == correlation_id
        assert event.details["record_count"] == 4

    def test_builder_storage_error_is_error_severity(self):
        event = AuditEventBuilder.storage_error(
            error_type="StoreReadError",
            error_message="missing",
            ledger_path="GeneralLedger.json",
            correlation_id=uuid4(),
        )
        assert event.severity == AuditSeverity.ERROR
        assert event.error_type == "StoreReadError"

    def test_builder_filter_rejected_is_warning(self):
        event = AuditEventBuilder.filter_rejected("bad interval", uuid4())
        assert event.severity == AuditSeverity.WARNING
        assert event.event_type == AuditEventType.FILTER_REJECTED

    def test_every_event_type_has_a_builder(self):
        """Each audited event kind is emitted by some builder method."""
        builders = {
            name for name in vars(AuditEventBuilder) if not name.startswith("_")
        }
        assert {event_type.value for event_type in AuditEventType} == builders


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
