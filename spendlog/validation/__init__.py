"""Transaction input validation package."""

from spendlog.validation.validator import (
    InvalidInputError,
    TransactionBuilder,
    parse_amount,
    parse_cli_assignments,
)

__all__ = [
    "InvalidInputError",
    "TransactionBuilder",
    "parse_amount",
    "parse_cli_assignments",
]
