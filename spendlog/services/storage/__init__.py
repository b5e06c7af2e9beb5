"""
Storage Services Package

Provides the abstract ledger interface and its implementations.
The JSON file is the real backend; the in-memory one is for tests.
"""

from spendlog.services.storage.interface import (
    LedgerStorageInterface,
    StorageError,
    StoreReadError,
    StoreWriteError,
)
from spendlog.services.storage.json_file import JsonFileLedgerStorage
from spendlog.services.storage.memory import InMemoryLedgerStorage

__all__ = [
    # Interfaces
    "LedgerStorageInterface",
    # Exceptions
    "StorageError",
    "StoreReadError",
    "StoreWriteError",
    # Implementations
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
]
