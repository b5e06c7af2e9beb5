"""
Summary Execution Engine

DESIGN DECISION: Aggregation is DETERMINISTIC and exact.
Records are visited in ledger order; each one that passes the filter is
tallied into its category's accumulator. Totals are integer cents, so
summing ten thousand 0.10 amounts gives exactly 1000.00.

GUARANTEES:
- A record is counted iff the filter matches it
- Categories appear in the order their first matching record appears
- Items inside a category keep ledger order
- Same ledger + same filter -> same summary, every time
"""

from typing import Iterable, Optional

from spendlog.models.transaction import (
    CategoryAccumulator,
    SpendingSummary,
    TransactionRecord,
)
from spendlog.queries.filters import TransactionFilter
from spendlog.services.storage import LedgerStorageInterface


def aggregate(
    records: Iterable[TransactionRecord],
    transaction_filter: TransactionFilter,
) -> dict[str, CategoryAccumulator]:
    """
    Group matching records by category.

    Returns:
        Accumulators keyed by category, in first-seen order
    """
    categories: dict[str, CategoryAccumulator] = {}

    for record in records:
        if not transaction_filter.matches(record):
            continue
        accumulator = categories.get(record.category)
        if accumulator is None:
            accumulator = CategoryAccumulator(category=record.category)
            categories[record.category] = accumulator
        accumulator.add(record)

    return categories


class SummaryExecutor:
    """
    Runs a summary against ledger storage.

    Storage errors are not caught here; a summary either completes or
    the error reaches the caller with no partial result.
    """

    def __init__(self, storage: LedgerStorageInterface):
        self._storage = storage

    def execute(
        self,
        transaction_filter: Optional[TransactionFilter] = None,
    ) -> SpendingSummary:
        transaction_filter = transaction_filter or TransactionFilter()

        scanned = 0

        def counted(records: Iterable[TransactionRecord]):
            nonlocal scanned
            for record in records:
                scanned += 1
                yield record

        categories = aggregate(
            counted(self._storage.iter_records()),
            transaction_filter,
        )

        return SpendingSummary(
            categories=categories,
            scanned_count=scanned,
            filter_description=transaction_filter.describe(),
        )
