from __future__ import annotations

from _bootstrap import load_settings

from src.hr_portal.hr_portal.container import build_container
from src.hr_portal.hr_portal.core.constants import KNOWN_TABLES


def main() -> None:
    settings = load_settings()
    container = build_container(settings=settings)
    try:
        status = container.health_checker.check(KNOWN_TABLES)
    finally:
        container.close()

    print(status.message)
    for table in status.tables:
        if table.accessible:
            print(f"  OK  {table.table}")
        else:
            print(f"  ERR {table.table} - {table.error}")


if __name__ == "__main__":
    main()
