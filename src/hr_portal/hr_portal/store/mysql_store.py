from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

import mysql.connector

from ..core.constants import PRIMARY_KEY
from ..core.exceptions import StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, quote_identifier
from .repository import Filters, Record


def _where(filters: Filters) -> tuple[str, tuple]:
    clauses: list[str] = []
    params: list[Any] = []
    for column, value in filters.items():
        if value is None:
            clauses.append(f"{quote_identifier(column)} IS NULL")
        else:
            clauses.append(f"{quote_identifier(column)}=%s")
            params.append(value)
    return " AND ".join(clauses), tuple(params)


def _columns(columns: str) -> str:
    if columns.strip() == "*":
        return "*"
    return ", ".join(quote_identifier(c.strip()) for c in columns.split(","))


class MySQLCollectionStore:
    """Collection store over a MySQL database (one short-lived connection per call)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _run(self, table: str, action):
        try:
            return action()
        except mysql.connector.Error as e:
            raise StoreError(str(e.msg or e), code=str(e.errno) if e.errno else None) from e
        except ValueError as e:
            raise StoreError(f"{table}: {e}") from e

    def select(
        self,
        table: str,
        *,
        filters: Optional[Filters] = None,
        columns: str = "*",
        limit: Optional[int] = None,
    ) -> Sequence[Record]:
        def action():
            sql = f"SELECT {_columns(columns)} FROM {quote_identifier(table)}"
            params: tuple = ()
            if filters:
                where, params = _where(filters)
                sql += f" WHERE {where}"
            if limit is not None:
                sql += f" LIMIT {int(limit)}"
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(sql, params)
                return fetchall(cur)

        return self._run(table, action)

    def insert(self, table: str, record: Mapping[str, Any]) -> Record:
        def action():
            names = ", ".join(quote_identifier(c) for c in record)
            marks = ", ".join(["%s"] * len(record))
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO {quote_identifier(table)}({names}) VALUES({marks})",
                    tuple(record.values()),
                )
                row_id = cur.lastrowid
                if not row_id:
                    return dict(record)
                cur.execute(
                    f"SELECT * FROM {quote_identifier(table)} WHERE {quote_identifier(PRIMARY_KEY)}=%s",
                    (row_id,),
                )
                return fetchone(cur) or {**record, PRIMARY_KEY: row_id}

        return self._run(table, action)

    def update(self, table: str, values: Mapping[str, Any], *, filters: Filters) -> Sequence[Record]:
        if not filters:
            raise StoreError(f"Refusing unfiltered update on {table}")
        if not values:
            raise StoreError(f"Nothing to update on {table}")

        def action():
            assignments = ", ".join(f"{quote_identifier(c)}=%s" for c in values)
            where, params = _where(filters)
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE {quote_identifier(table)} SET {assignments} WHERE {where}",
                    tuple(values.values()) + params,
                )
                # Re-read with the updated values applied to the filter set.
                new_filters = {**filters, **{k: v for k, v in values.items() if k in filters}}
                where, params = _where(new_filters)
                cur.execute(f"SELECT * FROM {quote_identifier(table)} WHERE {where}", params)
                return fetchall(cur)

        return self._run(table, action)

    def delete(self, table: str, *, filters: Filters) -> int:
        if not filters:
            raise StoreError(f"Refusing unfiltered delete on {table}")

        def action():
            where, params = _where(filters)
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"DELETE FROM {quote_identifier(table)} WHERE {where}", params)
                return cur.rowcount

        return self._run(table, action)

    def close(self) -> None:
        # Connections are per call; nothing is held between operations.
        return None
