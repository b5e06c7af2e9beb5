"""Filtering, aggregation and rendering of spending summaries."""

from spendlog.queries.executor import SummaryExecutor, aggregate
from spendlog.queries.filters import (
    InvalidFilterError,
    TransactionFilter,
    parse_interval,
    resolve_cutoff,
)
from spendlog.queries.presenter import (
    SummaryPresenter,
    format_amount,
    format_currency,
)

__all__ = [
    "InvalidFilterError",
    "SummaryExecutor",
    "SummaryPresenter",
    "TransactionFilter",
    "aggregate",
    "format_amount",
    "format_currency",
    "parse_interval",
    "resolve_cutoff",
]
