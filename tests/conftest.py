from __future__ import annotations

from datetime import date
from types import SimpleNamespace

import pytest

from src.hr_portal.hr_portal.core.exceptions import StoreError
from src.hr_portal.hr_portal.store.memory_store import InMemoryCollectionStore


class RecordingStore:
    """Wraps a store and records every call made through it."""

    def __init__(self, inner):
        self.inner = inner
        self.calls: list[tuple[str, str]] = []
        self.inserted: list[dict] = []

    def select(self, table, *, filters=None, columns="*", limit=None):
        self.calls.append(("select", table))
        return self.inner.select(table, filters=filters, columns=columns, limit=limit)

    def insert(self, table, record):
        self.calls.append(("insert", table))
        self.inserted.append(dict(record))
        return self.inner.insert(table, record)

    def update(self, table, values, *, filters):
        self.calls.append(("update", table))
        return self.inner.update(table, values, filters=filters)

    def delete(self, table, *, filters):
        self.calls.append(("delete", table))
        return self.inner.delete(table, filters=filters)

    def close(self):
        self.inner.close()


class BrokenStore:
    """Every operation fails the way an unreachable backend does."""

    def __init__(self, message: str = "connection refused"):
        self.message = message

    def _fail(self, *args, **kwargs):
        raise StoreError(self.message, status_code=503)

    select = insert = update = delete = _fail

    def close(self):
        return None


@pytest.fixture
def memory_store() -> InMemoryCollectionStore:
    return InMemoryCollectionStore()


@pytest.fixture
def fixed_today() -> date:
    return date(2026, 2, 2)


@pytest.fixture
def test_settings() -> SimpleNamespace:
    return SimpleNamespace(
        SECRET_KEY="test-secret",
        STORE_BACKEND="memory",
        STORE_URL="",
        STORE_SERVICE_KEY="",
        REQUEST_TIMEOUT=5.0,
        DB_CONFIG={},
        DEMO_PASSWORD="test-password",
        LOG_LEVEL="WARNING",
        DEBUG=False,
        TESTING=True,
        AUTO_INIT_DB=False,
    )
