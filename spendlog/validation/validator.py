"""
Transaction Input Validation

Turns raw key/value input (from the command line or a form) into a
TransactionRecord, or refuses loudly.

RULES:
- name, category and amount are all required and must be non-empty
- no other keys are accepted
- name and category are copied verbatim (no trimming, no case changes)
- amount must match AMOUNT_PATTERN: digits, optionally a dot and more
  digits. No sign, no exponent, no "5." or ".5" forms.
- amount is rounded half-up to whole cents and may have at most
  MAX_AMOUNT_DIGITS digits, cents included
- timestamp is the time of creation, in UTC

IMPORTANT: Validation NEVER silently fixes input. A value that does not
fit the grammar is rejected, not coerced.
"""

import re
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Mapping, Optional, Sequence

from pydantic import ValidationError

from spendlog.errors import LedgerError
from spendlog.models.transaction import CENT, MAX_AMOUNT_DIGITS, TransactionRecord


REQUIRED_FIELDS = ("name", "category", "amount")
AMOUNT_PATTERN = re.compile(r"[0-9]+(\.[0-9]+)?")


class InvalidInputError(LedgerError):
    """Transaction input is missing a field or has a malformed value."""
    pass


def parse_amount(raw: str) -> Decimal:
    """
    Parse a non-negative decimal amount and round it to whole cents.

    Raises:
        InvalidInputError: If `raw` is not a plain non-negative decimal
    """
    if not AMOUNT_PATTERN.fullmatch(raw):
        raise InvalidInputError(
            f"Amount must be a non-negative decimal number, not '{raw}'"
        )
    try:
        amount = Decimal(raw).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidInputError(f"Amount is out of range: '{raw}'")
    if len(amount.as_tuple().digits) > MAX_AMOUNT_DIGITS:
        raise InvalidInputError(
            f"Amount is out of range: '{raw}' "
            f"(at most {MAX_AMOUNT_DIGITS} digits including cents)"
        )
    return amount


def parse_cli_assignments(args: Sequence[str]) -> dict[str, str]:
    """
    Parse `-key=value` assignments into a raw input mapping.

    Example:
        ["-name=Coffee", "-category=Food", "-amount=3.50"]
        -> {"name": "Coffee", "category": "Food", "amount": "3.50"}

    The value is everything after the first "=", so values may contain "=".

    Raises:
        InvalidInputError: On a wrong argument count or an unknown key
    """
    if len(args) != len(REQUIRED_FIELDS):
        raise InvalidInputError(
            "Must provide arguments for exactly -name, -category, and -amount"
        )

    raw: dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        key = key.lstrip("-")
        if not sep or key not in REQUIRED_FIELDS:
            raise InvalidInputError(
                "Argument key must be -name, -category, or -amount, "
                f"not {key or 'empty'}"
            )
        if key in raw:
            raise InvalidInputError(f"Argument -{key} given more than once")
        raw[key] = value
    return raw


class TransactionBuilder:
    """
    Builds well-formed TransactionRecords from raw input.

    The clock is injectable so tests can pin the timestamp.
    """

    def __init__(self, clock=None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def build(
        self,
        raw: Mapping[str, Optional[str]],
        now: Optional[datetime] = None,
    ) -> TransactionRecord:
        """
        Validate `raw` and create a record timestamped `now`.

        Raises:
            InvalidInputError: On missing, empty, unknown or malformed fields
        """
        unknown = sorted(set(raw) - set(REQUIRED_FIELDS))
        if unknown:
            raise InvalidInputError(
                f"Unknown field(s): {', '.join(unknown)}. "
                "Expected name, category and amount"
            )

        for field in REQUIRED_FIELDS:
            value = raw.get(field)
            if value is None or value == "":
                raise InvalidInputError(f"Missing required field: {field}")

        amount = parse_amount(raw["amount"])

        try:
            return TransactionRecord(
                name=raw["name"],
                category=raw["category"],
                amount=amount,
                timestamp=now or self._clock(),
            )
        except ValidationError as e:
            # Field checks above should make this unreachable
            raise InvalidInputError(str(e)) from e
