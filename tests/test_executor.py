"""Tests for the aggregation engine."""

import random
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from spendlog.queries import SummaryExecutor, TransactionFilter, aggregate
from spendlog.services.storage import InMemoryLedgerStorage, StoreReadError


NOW = datetime(2024, 3, 31, tzinfo=timezone.utc)


@pytest.fixture
def mixed_records(make_record):
    """A ledger spanning three categories and several months, out of time order."""
    return [
        make_record("Coffee", "Food", "3.50", NOW - timedelta(days=2)),
        make_record("Bus", "Transit", "2.25", NOW - timedelta(days=70)),
        make_record("Bagel", "Food", "2.10", NOW - timedelta(days=40)),
        make_record("Movie", "Fun", "12.00", NOW - timedelta(days=1)),
        make_record("Train", "Transit", "8.40", NOW - timedelta(days=5)),
        make_record("Lunch", "Food", "11.95", NOW - timedelta(days=10)),
    ]


class TestAggregate:
    """Grouping, ordering and totals."""

    def test_groups_by_category_in_first_seen_order(self, mixed_records):
        result = aggregate(mixed_records, TransactionFilter.build())
        assert list(result) == ["Food", "Transit", "Fun"]

    def test_items_keep_ledger_order(self, mixed_records):
        result = aggregate(mixed_records, TransactionFilter.build())
        assert [r.name for r in result["Food"].items] == ["Coffee", "Bagel", "Lunch"]
        assert [r.name for r in result["Transit"].items] == ["Bus", "Train"]

    def test_totals_in_minor_units(self, mixed_records):
        result = aggregate(mixed_records, TransactionFilter.build())
        assert result["Food"].total_minor_units == 350 + 210 + 1195
        assert result["Transit"].total_minor_units == 1065
        assert result["Fun"].total_minor_units == 1200

    def test_category_order_follows_matching_records_only(self, mixed_records):
        """Transit's first record is too old; Fun is now seen before Transit."""
        f = TransactionFilter.build(interval="30d", now=NOW)
        result = aggregate(mixed_records, f)
        assert list(result) == ["Food", "Fun", "Transit"]
        assert [r.name for r in result["Transit"].items] == ["Train"]

    def test_includes_record_iff_filter_matches(self, mixed_records):
        for f in (
            TransactionFilter.build(),
            TransactionFilter.build(category="Food"),
            TransactionFilter.build(interval="1m", now=NOW),
            TransactionFilter.build(category="Transit", interval="30d", now=NOW),
            TransactionFilter.build(category="Nope"),
        ):
            result = aggregate(mixed_records, f)
            included = [r for acc in result.values() for r in acc.items]
            expected = [r for r in mixed_records if f.matches(r)]
            assert sorted(included, key=mixed_records.index) == expected
            assert len(included) == len(expected)

    def test_no_matches_gives_empty_mapping(self, mixed_records):
        result = aggregate(mixed_records, TransactionFilter.build(category="Groceries"))
        assert result == {}

    def test_empty_ledger(self):
        assert aggregate([], TransactionFilter.build()) == {}

    def test_no_floating_point_drift(self, make_record):
        records = [make_record(amount="0.10") for _ in range(10_000)]
        result = aggregate(records, TransactionFilter.build())
        assert result["Food"].total_minor_units == 100_000
        assert result["Food"].total == Decimal("1000.00")

    def test_no_drift_with_float_sourced_amounts(self, make_record):
        """Amounts that were floats in JSON still sum exactly."""
        from spendlog.models.transaction import TransactionRecord

        records = [
            TransactionRecord(name="x", category="Food", amount=value, timestamp=NOW)
            for value in [0.1, 0.2, 0.7] * 5_000
        ]
        result = aggregate(records, TransactionFilter.build())
        assert result["Food"].total_minor_units == 5_000 * 100

    def test_deterministic(self, make_record):
        rng = random.Random(42)
        records = [
            make_record(
                name=f"item{i}",
                category=rng.choice(["A", "B", "C", "D"]),
                amount=f"{rng.randint(0, 9999) / 100:.2f}",
                timestamp=NOW - timedelta(days=rng.randint(0, 400)),
            )
            for i in range(500)
        ]
        f = TransactionFilter.build(interval="6m", now=NOW)
        first = aggregate(records, f)
        second = aggregate(records, f)
        assert list(first) == list(second)
        for category in first:
            assert first[category].total_minor_units == second[category].total_minor_units
            assert first[category].items == second[category].items

    def test_total_matches_sum_of_rounded_amounts(self, make_record):
        records = [
            make_record(amount=a) for a in ["0.01", "19.99", "0.50", "100.00", "7.07"]
        ]
        result = aggregate(records, TransactionFilter.build())
        assert result["Food"].total_minor_units == sum(
            int(Decimal(a) * 100) for a in ["0.01", "19.99", "0.50", "100.00", "7.07"]
        )


class TestSummaryExecutor:
    """Running aggregation against storage."""

    def test_execute_counts_scanned_and_matched(self, mixed_records):
        executor = SummaryExecutor(InMemoryLedgerStorage(mixed_records))
        summary = executor.execute(TransactionFilter.build(category="Food"))
        assert summary.scanned_count == 6
        assert summary.record_count == 3
        assert summary.filter_description == ["category of Food"]

    def test_execute_without_filter(self, mixed_records):
        summary = SummaryExecutor(InMemoryLedgerStorage(mixed_records)).execute()
        assert summary.record_count == 6
        assert summary.filter_description == []

    def test_storage_errors_propagate(self):
        with pytest.raises(StoreReadError):
            SummaryExecutor(InMemoryLedgerStorage()).execute()
