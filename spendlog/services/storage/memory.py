"""
In-memory ledger storage.

Holds the ledger as a plain list. Used by tests and by anything that
wants to summarize records without touching the filesystem.
"""

from typing import Iterable, Iterator, Optional

from spendlog.models.transaction import TransactionRecord
from spendlog.services.storage.interface import (
    LedgerStorageInterface,
    StoreReadError,
)


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Ledger storage backed by a list. `None` means "not created yet"."""

    def __init__(self, records: Optional[Iterable[TransactionRecord]] = None):
        self._records: Optional[list[TransactionRecord]] = (
            list(records) if records is not None else None
        )
        self.write_count = 0

    @property
    def location(self) -> str:
        return "<memory>"

    def exists(self) -> bool:
        return self._records is not None

    def iter_records(self) -> Iterator[TransactionRecord]:
        if self._records is None:
            raise StoreReadError("Ledger has not been initialized")
        yield from list(self._records)

    def overwrite(self, records: list[TransactionRecord]) -> None:
        self._records = list(records)
        self.write_count += 1
