from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def quote_identifier(name: str) -> str:
    """Back-quote a table/column name after checking it is a plain identifier.

    Identifiers cannot be bound as query parameters, so anything that is not
    a bare word is refused outright.
    """

    if not _IDENTIFIER_RE.match(name or ""):
        raise ValueError(f"Invalid identifier: {name!r}")
    return f"`{name}`"
