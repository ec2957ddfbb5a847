"""In-memory collection store.

Used when no backend is configured (``STORE_BACKEND=memory``) and by the tests.
Tables can be declared with a ``TableSchema`` so the store behaves like the
remote one: unknown columns, missing required columns and disallowed values
are rejected with the same message shapes the hosted Postgres returns.
"""

from __future__ import annotations

import copy
import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Collection, Mapping, Optional, Sequence

from ..core.constants import PRIMARY_KEY
from ..core.exceptions import StoreError
from .repository import Filters, Record


@dataclass(frozen=True)
class TableSchema:
    """Acceptance policy of one table.

    ``columns=None`` accepts any column name. ``accepts`` is an extra predicate
    over the full record, for policies the other fields cannot express.
    """

    columns: Optional[frozenset[str]] = None
    required: frozenset[str] = frozenset()
    allowed_values: Mapping[str, Collection[Any]] = field(default_factory=dict)
    accepts: Optional[Callable[[Mapping[str, Any]], bool]] = None

    @classmethod
    def of(cls, *columns: str, required: Collection[str] = (), **kwargs: Any) -> "TableSchema":
        return cls(columns=frozenset(columns) | frozenset(required), required=frozenset(required), **kwargs)


class InMemoryCollectionStore:
    def __init__(self, schemas: Optional[Mapping[str, TableSchema]] = None, *, strict: bool = False):
        self._schemas: dict[str, TableSchema] = dict(schemas or {})
        self._rows: dict[str, list[Record]] = {name: [] for name in self._schemas}
        self._ids = itertools.count(1)
        self._strict = strict

    # Inspection helpers (tests and dev tooling)
    def rows(self, table: str) -> list[Record]:
        return copy.deepcopy(self._rows.get(table, []))

    def declare(self, table: str, schema: TableSchema) -> None:
        self._schemas[table] = schema
        self._rows.setdefault(table, [])

    def _table(self, table: str, *, create: bool = False) -> list[Record]:
        if table not in self._rows:
            if self._strict or not create:
                raise StoreError(f'relation "public.{table}" does not exist', status_code=404, code="42P01")
            self._rows[table] = []
        return self._rows[table]

    def _check_columns(self, table: str, values: Mapping[str, Any]) -> None:
        schema = self._schemas.get(table)
        if not schema or schema.columns is None:
            return
        for column in values:
            if column != PRIMARY_KEY and column not in schema.columns:
                raise StoreError(
                    f"Could not find the '{column}' column of '{table}' in the schema cache",
                    status_code=400,
                    code="PGRST204",
                )

    def _check_values(self, table: str, record: Mapping[str, Any]) -> None:
        schema = self._schemas.get(table)
        if not schema:
            return
        for column, allowed in schema.allowed_values.items():
            if column in record and record[column] not in allowed:
                raise StoreError(
                    f'new row for relation "{table}" violates check constraint "{table}_{column}_check"',
                    status_code=400,
                    code="23514",
                )
        if schema.accepts is not None and not schema.accepts(record):
            raise StoreError(
                f'new row for relation "{table}" violates check constraint "{table}_row_check"',
                status_code=400,
                code="23514",
            )

    def _check_required(self, table: str, record: Mapping[str, Any]) -> None:
        schema = self._schemas.get(table)
        if not schema:
            return
        for column in sorted(schema.required):
            if record.get(column) is None:
                raise StoreError(
                    f'null value in column "{column}" of relation "{table}" violates not-null constraint',
                    status_code=400,
                    code="23502",
                )

    @staticmethod
    def _matches(row: Mapping[str, Any], filters: Optional[Filters]) -> bool:
        return all(row.get(column) == value for column, value in (filters or {}).items())

    def select(
        self,
        table: str,
        *,
        filters: Optional[Filters] = None,
        columns: str = "*",
        limit: Optional[int] = None,
    ) -> Sequence[Record]:
        rows = [r for r in self._table(table) if self._matches(r, filters)]
        if limit is not None:
            rows = rows[: int(limit)]
        if columns.strip() != "*":
            wanted = [c.strip() for c in columns.split(",")]
            self._check_columns(table, dict.fromkeys(wanted))
            rows = [{c: r.get(c) for c in wanted} for r in rows]
        return copy.deepcopy(rows)

    def insert(self, table: str, record: Mapping[str, Any]) -> Record:
        rows = self._table(table, create=True)
        self._check_columns(table, record)
        self._check_required(table, record)
        self._check_values(table, record)

        row = copy.deepcopy(dict(record))
        row.setdefault(PRIMARY_KEY, next(self._ids))
        if any(r.get(PRIMARY_KEY) == row[PRIMARY_KEY] for r in rows):
            raise StoreError(
                f'duplicate key value violates unique constraint "{table}_pkey"', status_code=409, code="23505"
            )
        rows.append(row)
        return copy.deepcopy(row)

    def update(self, table: str, values: Mapping[str, Any], *, filters: Filters) -> Sequence[Record]:
        if not filters:
            raise StoreError(f"Refusing unfiltered update on {table}")
        rows = self._table(table)
        self._check_columns(table, values)

        # All matching rows are checked before any is written.
        pending: list[tuple[Record, Record]] = []
        for row in rows:
            if self._matches(row, filters):
                candidate = {**row, **copy.deepcopy(dict(values))}
                self._check_required(table, candidate)
                self._check_values(table, candidate)
                pending.append((row, candidate))

        for row, candidate in pending:
            row.update(candidate)
        return [copy.deepcopy(row) for row, _ in pending]

    def delete(self, table: str, *, filters: Filters) -> int:
        if not filters:
            raise StoreError(f"Refusing unfiltered delete on {table}")
        rows = self._table(table)
        kept = [r for r in rows if not self._matches(r, filters)]
        removed = len(rows) - len(kept)
        self._rows[table] = kept
        return removed

    def close(self) -> None:
        return None
