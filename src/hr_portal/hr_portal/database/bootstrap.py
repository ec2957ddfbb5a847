from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator, Optional

from .connection import DatabaseConnection


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a schema file into statements.

    Whole-line `--` comments are dropped; `;` inside single or double quotes
    does not end a statement.
    """

    text = "\n".join(ln for ln in sql.splitlines() if not ln.lstrip().startswith("--"))
    buf: list[str] = []
    quote: Optional[str] = None
    escaped = False

    for ch in text:
        buf.append(ch)
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            buf.pop()
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> int:
    """Apply schema.sql and return the number of statements executed."""
    ensure_database_exists(conn_factory)

    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))
    executed = 0

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            executed += 1
        conn.commit()
    finally:
        conn.close()
    return executed


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
