from __future__ import annotations

import re

# Message shapes naming a column the target table does not have.
_MISSING_COLUMN_PATTERNS = (
    # PostgREST schema cache
    re.compile(r"Could not find the '([^']+)' column of '[^']+' in the schema cache"),
    # Postgres
    re.compile(r'column "([^"]+)" of relation "[^"]+" does not exist'),
    re.compile(r'column [\w.]*?"?([A-Za-z_][A-Za-z0-9_]*)"? does not exist'),
    # MySQL
    re.compile(r"Unknown column '(?:[^'.]+\.)?([^'.]+)' in '[^']+'"),
)

_MISSING_TABLE_PATTERNS = (
    re.compile(r'relation "(?:[^".]+\.)?([^"]+)" does not exist'),
    re.compile(r"Could not find the table '(?:[^'.]+\.)?([^']+)' in the schema cache"),
    re.compile(r"Table '(?:[^'.]+\.)?([^']+)' doesn't exist"),
)


def missing_columns(message: str) -> list[str]:
    """Column names an error message reports as absent, in order of appearance."""
    found: list[str] = []
    for pattern in _MISSING_COLUMN_PATTERNS:
        for match in pattern.finditer(message or ""):
            name = match.group(1)
            if name not in found:
                found.append(name)
    return found


def missing_table(message: str) -> str | None:
    for pattern in _MISSING_TABLE_PATTERNS:
        match = pattern.search(message or "")
        if match:
            return match.group(1)
    return None
