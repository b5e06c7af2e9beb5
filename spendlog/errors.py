"""
Error taxonomy root.

Every failure a ledger command can hit derives from LedgerError so the
flows can report them uniformly. The concrete kinds live next to the
code that raises them:

- StoreReadError / StoreWriteError  -> spendlog.services.storage
- InvalidFilterError                -> spendlog.queries.filters
- InvalidInputError                 -> spendlog.validation
"""


class LedgerError(Exception):
    """Base exception for all ledger operations."""
    pass
