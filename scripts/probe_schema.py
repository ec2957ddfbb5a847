"""Probe the columns of the tables whose schema is still unknown.

Every probe row (equipment included) is deleted again before the script exits.
"""

from __future__ import annotations

from _bootstrap import load_settings

from src.hr_portal.hr_portal.container import build_container
from src.hr_portal.hr_portal.core.exceptions import StoreError
from src.hr_portal.hr_portal.discovery.catalog import (
    PROBE_CATALOG,
    STATUS_VALUES_TO_TRY,
    equipment_shape,
)


def _print_result(result) -> None:
    print(result.summary())
    if result.sample_columns:
        print(f"  sample row columns: [{', '.join(result.sample_columns)}]")
    for attempt in result.attempts:
        mark = "OK " if attempt.accepted else "ERR"
        print(f"  {mark} candidate {attempt.index + 1}: {attempt.error or list(attempt.shape)}")
    if result.absent_fields:
        print(f"  columns confirmed absent: [{', '.join(result.absent_fields)}]")


def main() -> None:
    settings = load_settings()
    container = build_container(settings=settings)
    prober = container.prober

    try:
        profiles = container.store.select("profiles", columns="id", limit=1)
        if not profiles:
            raise SystemExit("No profiles available: run scripts/seed_db.py first.")
        context = {"profile_id": profiles[0]["id"]}

        try:
            with prober.probe_row("bookable_equipment", equipment_shape()) as equipment:
                context["equipment_id"] = equipment["id"]
                bookings = prober.discover("equipment_bookings", PROBE_CATALOG["equipment_bookings"](context))
                _print_result(bookings)

                if bookings.matched:
                    base = {k: v for k, v in bookings.matched_shape.items() if k != "status"}
                    values = prober.discover_values("equipment_bookings", base, "status", STATUS_VALUES_TO_TRY)
                    print(f"  accepted status values: {list(values.accepted)}")
        except StoreError as e:
            print(f"bookable_equipment: cannot create probe equipment: {e.message}")

        _print_result(prober.discover("safety_incidents", PROBE_CATALOG["safety_incidents"](context)))
    finally:
        container.close()


if __name__ == "__main__":
    main()
