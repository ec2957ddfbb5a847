from __future__ import annotations

from datetime import date

from src.hr_portal.hr_portal.discovery.catalog import (
    PROBE_CATALOG,
    equipment_booking_candidates,
    safety_incident_candidates,
)


def test_equipment_booking_candidates_reference_given_ids():
    shapes = equipment_booking_candidates(equipment_id=11, profile_id="p-1", today=date(2026, 2, 2))

    assert len(shapes) == 5
    assert shapes[1]["start_date"] == "2026-02-02"
    assert shapes[1]["end_date"] == "2026-02-09"
    assert all(11 in s.values() and "p-1" in s.values() for s in shapes)


def test_safety_incident_candidates_are_distinct_hypotheses():
    shapes = safety_incident_candidates(profile_id="p-1", today=date(2026, 2, 2))

    assert len({tuple(sorted(s)) for s in shapes}) == len(shapes)


def test_catalog_builders_take_a_context():
    ctx = {"equipment_id": 1, "profile_id": 2}

    assert set(PROBE_CATALOG) == {"equipment_bookings", "safety_incidents"}
    assert all(builder(ctx) for builder in PROBE_CATALOG.values())
