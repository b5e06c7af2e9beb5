"""
JSON File Storage Implementation

DESIGN DECISION: The ledger is one JSON document, {"items": [...]},
rewritten in full on every append. This keeps the file trivially
readable and editable by hand, at the cost of O(n) work per write.
That is fine at personal scale.

TRADEOFFS:
- No transactions and no locking: concurrent appends are last-writer-wins
- Whole file is decoded per read (records are then yielded in order)
- Amounts are decoded as Decimal, so stored cents never pass through float

With `atomic_writes` enabled the new document is written to a sibling
temporary file and renamed over the ledger, so a crash mid-write
leaves either the old or the new file, never a truncated one. It does
not change the last-writer-wins behaviour.
"""

import json
import os
import tempfile
from decimal import Decimal
from pathlib import Path
from typing import Iterator, Optional, Union

from pydantic import ValidationError

from spendlog.config import get_settings
from spendlog.models.transaction import LedgerDocument, TransactionRecord
from spendlog.services.storage.interface import (
    LedgerStorageInterface,
    StoreReadError,
    StoreWriteError,
)


ITEMS_FIELD = "items"


class JsonFileLedgerStorage(LedgerStorageInterface):
    """
    JSON file implementation of ledger storage.

    One record per element of the top-level "items" array.
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        atomic_writes: Optional[bool] = None,
    ):
        settings = get_settings()
        self._path = Path(path) if path is not None else settings.ledger_path
        self._atomic_writes = (
            settings.atomic_writes if atomic_writes is None else atomic_writes
        )

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def exists(self) -> bool:
        return self._path.is_file()

    def _read_document(self) -> list:
        """Read and structurally check the ledger, returning the raw items."""
        try:
            with self._path.open("r", encoding="utf-8") as f:
                document = json.load(f, parse_float=Decimal)
        except FileNotFoundError:
            raise StoreReadError(f"Ledger file not found: {self._path}")
        except json.JSONDecodeError as e:
            raise StoreReadError(f"Ledger file is not valid JSON: {self._path} ({e})")
        except (OSError, UnicodeDecodeError) as e:
            raise StoreReadError(f"Could not read ledger file {self._path}: {e}")

        if not isinstance(document, dict) or ITEMS_FIELD not in document:
            raise StoreReadError(
                f"Ledger file {self._path} has no '{ITEMS_FIELD}' field"
            )
        items = document[ITEMS_FIELD]
        if not isinstance(items, list):
            raise StoreReadError(
                f"Ledger field '{ITEMS_FIELD}' must be a list, got {type(items).__name__}"
            )
        return items

    def iter_records(self) -> Iterator[TransactionRecord]:
        """Yield records in file order, validating each as it is reached."""
        items = self._read_document()
        for index, item in enumerate(items):
            try:
                yield TransactionRecord.model_validate(item)
            except ValidationError as e:
                raise StoreReadError(
                    f"Malformed record at position {index} in {self._path}: "
                    f"{e.error_count()} validation error(s)"
                ) from e

    def overwrite(self, records: list[TransactionRecord]) -> None:
        payload = json.dumps(
            LedgerDocument(items=records).to_ledger_dict(),
            indent=2,
            ensure_ascii=False,
        ) + "\n"

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            if self._atomic_writes:
                self._replace_atomically(payload)
            else:
                self._path.write_text(payload, encoding="utf-8")
        except OSError as e:
            raise StoreWriteError(f"Could not write ledger file {self._path}: {e}")

    def _replace_atomically(self, payload: str) -> None:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            dir=self._path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self._path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
