"""Shared fixtures for spendlog tests."""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from spendlog.config import get_settings
from spendlog.models.transaction import TransactionRecord


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate every test from the developer's environment and .env file."""
    monkeypatch.chdir(tmp_path)
    for var in (
        "SPENDLOG_LEDGER_PATH",
        "SPENDLOG_ATOMIC_WRITES",
        "SPENDLOG_CURRENCY_SYMBOL",
        "SPENDLOG_SEPARATOR_WIDTH",
        "SPENDLOG_LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
    # Keep audit output out of captured command output
    monkeypatch.setenv("SPENDLOG_LOG_LEVEL", "CRITICAL")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_record():
    """Factory for TransactionRecords with sensible defaults."""
    def _make(
        name="Coffee",
        category="Food",
        amount="3.50",
        timestamp=datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc),
    ) -> TransactionRecord:
        return TransactionRecord(
            name=name,
            category=category,
            amount=Decimal(amount),
            timestamp=timestamp,
        )
    return _make


@pytest.fixture
def ledger_file(tmp_path):
    """Write a ledger document to disk and return its path."""
    def _write(items, name="GeneralLedger.json"):
        path = tmp_path / name
        path.write_text(json.dumps({"items": items}), encoding="utf-8")
        return path
    return _write
