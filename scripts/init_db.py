from __future__ import annotations

from _bootstrap import REPO_ROOT, load_settings

from src.hr_portal.hr_portal.database.bootstrap import apply_schema, list_tables
from src.hr_portal.hr_portal.database.connection import DatabaseConnection, DBConfig


def main() -> None:
    settings = load_settings()
    conn = DatabaseConnection(DBConfig.from_mapping(settings.DB_CONFIG))

    schema_path = REPO_ROOT / "database" / "schema.sql"
    executed = apply_schema(conn, schema_path=schema_path)
    tables = list_tables(conn)
    print(f"OK: Applied schema.sql ({executed} statements) -> {conn.config.describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
