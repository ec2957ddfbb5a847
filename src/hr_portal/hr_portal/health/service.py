from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..core.constants import CRITICAL_TABLES, DEGRADED_TABLE_RATIO
from ..core.enums import HealthStatus
from ..core.exceptions import StoreError
from ..store.repository import CollectionStore

logger = logging.getLogger(__name__)

CONNECTIVITY_TABLE = "profiles"


@dataclass(frozen=True)
class TableStatus:
    table: str
    accessible: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class DatabaseStatus:
    is_connected: bool
    tables: tuple[TableStatus, ...]
    elapsed_ms: int
    connection_error: Optional[str] = None

    @property
    def accessible_count(self) -> int:
        return sum(1 for t in self.tables if t.accessible)

    @property
    def total(self) -> int:
        return len(self.tables)

    @property
    def health(self) -> HealthStatus:
        if not self.is_connected or not self.tables:
            return HealthStatus.ERROR
        ratio = self.accessible_count / self.total
        if ratio == 1:
            return HealthStatus.HEALTHY
        if ratio >= DEGRADED_TABLE_RATIO:
            return HealthStatus.DEGRADED
        return HealthStatus.ERROR

    @property
    def message(self) -> str:
        if not self.is_connected:
            return f"Database connection failed: {self.connection_error}"
        return f"{self.health.value}: {self.accessible_count}/{self.total} tables accessible ({self.elapsed_ms}ms)"

    def as_dict(self) -> dict:
        return {
            "is_connected": self.is_connected,
            "health": self.health.value,
            "message": self.message,
            "elapsed_ms": self.elapsed_ms,
            "tables": [
                {"table": t.table, "accessible": t.accessible, "error": t.error} for t in self.tables
            ],
        }


class TableHealthChecker:
    def __init__(self, store: CollectionStore):
        self._store = store

    def _probe(self, table: str) -> TableStatus:
        try:
            self._store.select(table, limit=1)
        except StoreError as e:
            return TableStatus(table=table, accessible=False, error=e.message)
        return TableStatus(table=table, accessible=True)

    def check(self, tables: Sequence[str] = CRITICAL_TABLES) -> DatabaseStatus:
        started = time.perf_counter()
        connectivity = self._probe(CONNECTIVITY_TABLE)
        if not connectivity.accessible:
            elapsed = round((time.perf_counter() - started) * 1000)
            logger.warning("Store not reachable: %s", connectivity.error)
            return DatabaseStatus(
                is_connected=False, tables=(), elapsed_ms=elapsed, connection_error=connectivity.error
            )

        results = tuple(connectivity if t == CONNECTIVITY_TABLE else self._probe(t) for t in tables)
        elapsed = round((time.perf_counter() - started) * 1000)
        return DatabaseStatus(is_connected=True, tables=results, elapsed_ms=elapsed)

    def existing_tables(self, tables: Iterable[str]) -> list[str]:
        return [t for t in tables if self._probe(t).accessible]
