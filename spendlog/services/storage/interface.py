"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for ledger storage.
This allows us to:
1. Use an in-memory ledger in tests
2. Swap the JSON file for something else later
3. Keep the summary engine decoupled from file handling

The contract is deliberately small: read everything, or rewrite
everything. There is no partial update and no locking. Two appends
running at the same time both load, both add their record, and the
later overwrite wins - the earlier record is lost. That is a known
limitation of the format, not something implementations may paper over.
"""

from abc import ABC, abstractmethod
from typing import Iterator

from spendlog.errors import LedgerError
from spendlog.models.transaction import TransactionRecord


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger storage operations.

    Any storage implementation must implement these methods.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable location of the ledger (used in logs and errors)."""
        pass

    @abstractmethod
    def exists(self) -> bool:
        """Return True if a ledger has been created."""
        pass

    @abstractmethod
    def iter_records(self) -> Iterator[TransactionRecord]:
        """
        Yield every record in ledger order.

        Raises:
            StoreReadError: If the ledger is missing, unreadable or malformed
        """
        pass

    def load(self) -> list[TransactionRecord]:
        """
        Read the full ledger.

        Returns:
            All records in insertion order

        Raises:
            StoreReadError: If the ledger is missing, unreadable or malformed
        """
        return list(self.iter_records())

    @abstractmethod
    def overwrite(self, records: list[TransactionRecord]) -> None:
        """
        Replace the whole persisted ledger with `records`.

        Raises:
            StoreWriteError: If the write fails
        """
        pass

    def append(self, record: TransactionRecord) -> int:
        """
        Add a record to the end of the ledger.

        Load-modify-store: the full ledger is read, the record added,
        and the whole document written back.

        Returns:
            Number of records in the ledger after the append

        Raises:
            StoreReadError: If the current ledger cannot be read
            StoreWriteError: If the rewrite fails
        """
        records = self.load()
        records.append(record)
        self.overwrite(records)
        return len(records)

    def initialize_empty(self) -> bool:
        """
        Create an empty ledger if none exists yet.

        Returns:
            True if a new ledger was created, False if one already existed

        Raises:
            StoreWriteError: If the ledger cannot be created
        """
        if self.exists():
            return False
        self.overwrite([])
        return True


class StorageError(LedgerError):
    """Base exception for storage operations."""
    pass


class StoreReadError(StorageError):
    """Ledger is missing, unreadable or structurally invalid."""
    pass


class StoreWriteError(StorageError):
    """Ledger could not be written."""
    pass
