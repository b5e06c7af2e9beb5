"""
Core Data Models for spendlog

These models define the schemas for everything that is stored in or
read back from the ledger file.

DESIGN DECISION: Amounts are Decimal on the way in and out, and integer
minor units (cents) while being summed. The ledger file is decoded with
Decimal for JSON numbers. Amounts are written back as JSON numbers, so
they are capped at MAX_AMOUNT_DIGITS significant digits: within that a
float reproduces the decimal text exactly.

DESIGN DECISION: Categories are free text and compared exactly.
Unlike most text fields elsewhere we do NOT strip whitespace or
normalize case - "Food" and "food " are two different categories.
"""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


MINOR_UNITS_PER_UNIT = 100
CENT = Decimal("0.01")

# Significant digits a double (and so a written JSON number) holds exactly
MAX_AMOUNT_DIGITS = 15


def to_minor_units(amount: Decimal) -> int:
    """Round a currency amount to the nearest whole cent (half-up)."""
    return int(
        (amount * MINOR_UNITS_PER_UNIT).to_integral_value(rounding=ROUND_HALF_UP)
    )


def from_minor_units(minor_units: int) -> Decimal:
    """Exact Decimal currency value for an integer count of cents."""
    return (Decimal(minor_units) / MINOR_UNITS_PER_UNIT).quantize(CENT)


# =============================================================================
# TRANSACTION RECORD
# =============================================================================

class TransactionRecord(BaseModel):
    """
    A single recorded transaction.

    Records are immutable once built. The timestamp is always timezone
    aware; legacy entries without an offset are read as UTC.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Free-text label for the transaction"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Grouping key (case-sensitive, not normalized)"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        max_digits=MAX_AMOUNT_DIGITS,
        description="Amount in currency units"
    )
    timestamp: datetime = Field(
        ...,
        description="When the transaction was recorded"
    )

    @field_validator('amount', mode='before')
    @classmethod
    def coerce_float_amount(cls, v: Any) -> Any:
        """Route floats through str() so 0.1 becomes Decimal('0.1')."""
        if isinstance(v, float):
            return Decimal(str(v))
        return v

    @field_validator('timestamp')
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def amount_minor_units(self) -> int:
        """Amount in cents, as summed by the aggregation engine."""
        return to_minor_units(self.amount)

    def to_ledger_dict(self) -> dict:
        """
        Convert to the dict written into the ledger file.

        The amount is written as a JSON number, not a string. It fits
        in MAX_AMOUNT_DIGITS digits, so reading it back gives the same value.
        """
        return {
            "name": self.name,
            "category": self.category,
            "amount": float(self.amount),
            "timestamp": self.timestamp.isoformat(),
        }


class LedgerDocument(BaseModel):
    """
    The whole persisted ledger.

    The on-disk shape is {"items": [...]}; there is no version field.
    """

    items: list[TransactionRecord] = Field(
        default_factory=list,
        description="All recorded transactions in insertion order"
    )

    def to_ledger_dict(self) -> dict:
        return {"items": [item.to_ledger_dict() for item in self.items]}


# =============================================================================
# AGGREGATION MODELS
# =============================================================================

class CategoryAccumulator(BaseModel):
    """
    Running total and item list for one category.

    Created the first time a record of that category passes the filter.
    """

    category: str
    total_minor_units: int = Field(
        default=0,
        ge=0,
        description="Sum of item amounts in cents"
    )
    items: list[TransactionRecord] = Field(
        default_factory=list,
        description="Matching records in ledger order"
    )

    def add(self, record: TransactionRecord) -> None:
        """Tally a record into this category."""
        self.total_minor_units += record.amount_minor_units
        self.items.append(record)

    @property
    def total(self) -> Decimal:
        return from_minor_units(self.total_minor_units)

    @property
    def item_count(self) -> int:
        return len(self.items)


class SpendingSummary(BaseModel):
    """
    Result of running a summary over the ledger.

    `categories` keeps the order in which each category was first seen
    among matching records.
    """

    categories: dict[str, CategoryAccumulator] = Field(default_factory=dict)
    scanned_count: int = Field(
        default=0,
        ge=0,
        description="Records read from the ledger"
    )
    filter_description: list[str] = Field(
        default_factory=list,
        description="Active filters, e.g. ['category of Food']"
    )
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    correlation_id: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.categories

    @property
    def record_count(self) -> int:
        """Records that passed the filter."""
        return sum(acc.item_count for acc in self.categories.values())

    @property
    def grand_total_minor_units(self) -> int:
        return sum(acc.total_minor_units for acc in self.categories.values())
