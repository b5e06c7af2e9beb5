"""
Summary Presenter

Renders a SpendingSummary as plain text lines:

    Food - $3.50
    ------------------------
    -Coffee
      category: Food
      amount: $3.50
      timestamp added: Fri Mar  1 10:00:00 2024
    ------------------------

When nothing matched, a single line is produced instead, naming every
active filter (or saying the ledger has no transactions at all).
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from spendlog.config import LedgerSettings, get_settings
from spendlog.models.transaction import (
    CENT,
    CategoryAccumulator,
    SpendingSummary,
    from_minor_units,
)


def format_amount(amount: Decimal) -> str:
    """Always two decimals, rounded half-up: Decimal("5") -> "5.00"."""
    return str(amount.quantize(CENT, rounding=ROUND_HALF_UP))


def format_currency(minor_units: int) -> str:
    """Render integer cents as a currency amount: 500 -> "5.00"."""
    return format_amount(from_minor_units(minor_units))


def format_timestamp(timestamp: datetime) -> str:
    """Local time in the current locale's date and time representation."""
    return timestamp.astimezone().strftime("%c")


def empty_message(filter_description: list[str]) -> str:
    """The single line printed when no record matched."""
    if not filter_description:
        return "No transactions have been recorded."
    return f"No transactions found with {' and '.join(filter_description)}."


class SummaryPresenter:
    """Turns accumulators into report lines."""

    def __init__(self, settings: Optional[LedgerSettings] = None):
        settings = settings or get_settings()
        self._symbol = settings.currency_symbol
        self._separator = "-" * settings.separator_width

    def render(
        self,
        categories: dict[str, CategoryAccumulator],
        filter_description: list[str],
    ) -> list[str]:
        """Render accumulators, or the single empty-result line."""
        if not categories:
            return [empty_message(filter_description)]

        lines: list[str] = []
        for category, accumulator in categories.items():
            lines.append(
                f"{category} - {self._symbol}{format_currency(accumulator.total_minor_units)}"
            )
            lines.append(self._separator)
            for item in accumulator.items:
                lines.append(f"-{item.name}")
                lines.append(f"  category: {item.category}")
                lines.append(f"  amount: {self._symbol}{format_amount(item.amount)}")
                lines.append(f"  timestamp added: {format_timestamp(item.timestamp)}")
                lines.append(self._separator)
            lines.append("")
        return lines

    def render_summary(self, summary: SpendingSummary) -> str:
        return "\n".join(self.render(summary.categories, summary.filter_description))
