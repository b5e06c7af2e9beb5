"""
Summary Filters

A TransactionFilter is built once per summary from user input and
never changes afterwards. A record passes only if every active check
passes:

- category: exact, case-sensitive equality
- interval: record.timestamp >= cutoff, where cutoff = now minus the
  interval, computed with calendar arithmetic

Interval grammar: <positive integer><unit>, unit one of
  d - days
  m - calendar months
  n - calendar years

Calendar arithmetic means "1m" from 31 March is 29 February in a leap
year, not "30 days ago".
"""

import re
from datetime import datetime, timezone
from typing import Optional

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, ConfigDict

from spendlog.errors import LedgerError
from spendlog.models.transaction import TransactionRecord


INTERVAL_PATTERN = re.compile(r"([0-9]+)([dmn])")

INTERVAL_UNITS = {
    "d": "days",
    "m": "months",
    "n": "years",
}


class InvalidFilterError(LedgerError):
    """Category or interval filter input is malformed."""
    pass


def parse_interval(specifier: str) -> relativedelta:
    """
    Parse an interval specifier such as "30d", "2m" or "1n".

    Raises:
        InvalidFilterError: If `specifier` does not match the grammar or is zero
    """
    match = INTERVAL_PATTERN.fullmatch(specifier)
    if not match:
        raise InvalidFilterError(
            f"Interval must look like <number><d|m|n> (e.g. 30d, 3m, 1n), not '{specifier}'"
        )
    try:
        count = int(match.group(1))
    except ValueError:
        # int() refuses digit strings past the interpreter's conversion limit
        raise InvalidFilterError(f"Interval is too large: '{specifier}'")
    if count <= 0:
        raise InvalidFilterError(f"Interval must be a positive number, not '{specifier}'")
    return relativedelta(**{INTERVAL_UNITS[match.group(2)]: count})


def resolve_cutoff(specifier: str, now: datetime) -> datetime:
    """
    Earliest timestamp (inclusive) accepted by interval `specifier` at `now`.

    Raises:
        InvalidFilterError: If the specifier is malformed, or the cutoff
            falls before the earliest date a datetime can hold
    """
    delta = parse_interval(specifier)
    try:
        return now - delta
    except (OverflowError, ValueError):
        raise InvalidFilterError(
            f"Interval '{specifier}' reaches before the earliest representable date"
        )


class TransactionFilter(BaseModel):
    """
    Category and recency filter for a summary.

    Build it with TransactionFilter.build(); the model is frozen.
    """
    model_config = ConfigDict(frozen=True)

    category: Optional[str] = None
    interval: Optional[str] = None
    cutoff: Optional[datetime] = None

    @classmethod
    def build(
        cls,
        category: Optional[str] = None,
        interval: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "TransactionFilter":
        """
        Validate user input and resolve the cutoff once.

        Args:
            category: Category to keep, or None for all
            interval: Interval specifier, or None for all time
            now: Reference time for the cutoff (defaults to current UTC time)

        Raises:
            InvalidFilterError: On an empty category or a malformed interval
        """
        if category is not None and category == "":
            raise InvalidFilterError("Category filter cannot be empty")

        cutoff = None
        if interval is not None:
            now = now or datetime.now(timezone.utc)
            if now.tzinfo is None:
                now = now.replace(tzinfo=timezone.utc)
            cutoff = resolve_cutoff(interval, now)

        return cls(category=category, interval=interval, cutoff=cutoff)

    @property
    def is_active(self) -> bool:
        return self.category is not None or self.cutoff is not None

    def matches(self, record: TransactionRecord) -> bool:
        if self.category is not None and record.category != self.category:
            return False
        if self.cutoff is not None and record.timestamp < self.cutoff:
            return False
        return True

    def describe(self) -> list[str]:
        """Active filters as phrases, e.g. ["category of Food", "interval of 30d"]."""
        parts = []
        if self.category is not None:
            parts.append(f"category of {self.category}")
        if self.interval is not None:
            parts.append(f"interval of {self.interval}")
        return parts
