"""Services package."""

from spendlog.services.storage import (
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    StorageError,
    StoreReadError,
    StoreWriteError,
)

__all__ = [
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
    "LedgerStorageInterface",
    "StorageError",
    "StoreReadError",
    "StoreWriteError",
]
