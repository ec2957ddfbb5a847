"""Example: use the service layer directly (no Flask, no remote backend).

An in-memory store with a declared acceptance policy stands in for the
hosted database, so discovery and the smoke test can be tried offline.
"""

from src.hr_portal.hr_portal.discovery.service import SchemaProber
from src.hr_portal.hr_portal.smoke.service import CrudSmokeTester
from src.hr_portal.hr_portal.store.memory_store import InMemoryCollectionStore, TableSchema


def main():
    store = InMemoryCollectionStore(
        {"equipment_bookings": TableSchema.of("equipment_id", "employee_id", "booking_date", "status", required=("equipment_id",))}
    )

    result = SchemaProber(store).discover(
        "equipment_bookings",
        [
            {"equipment_id": 1, "user_id": 7, "start_datetime": "2026-01-01T00:00:00Z"},
            {"equipment_id": 1, "employee_id": 7, "booking_date": "2026-01-01", "status": "booked"},
        ],
    )
    print(result.summary())
    print("absent:", result.absent_fields)

    report = CrudSmokeTester(store).run("equipment_bookings", dict(result.matched_shape), {"status": "returned"})
    print(f"smoke: {report.passed}/{report.total}")


if __name__ == "__main__":
    main()
