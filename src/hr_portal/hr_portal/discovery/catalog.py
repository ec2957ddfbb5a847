"""Candidate shapes for tables whose columns are still unknown.

Each builder returns the hypotheses in the order they should be tried. The
referenced ids (profile, equipment) must exist in the store beforehand.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Mapping, Optional

Shape = dict[str, Any]

BOOKING_DAYS = 7

STATUS_VALUES_TO_TRY = (
    "pending", "active", "inactive", "approved", "rejected", "cancelled",
    "completed", "in_progress", "draft", "published", "archived",
    "available", "unavailable", "booked", "reserved", "checked_out",
    "checked_in", "returned", "overdue", "maintenance", "damaged",
    "open", "closed", "new", "current", "expired",
    "enabled", "disabled",
    None, "",
)


def equipment_shape(*, now: Optional[datetime] = None) -> Shape:
    stamp = int((now or datetime.now(timezone.utc)).timestamp())
    return {
        "name": f"Probe Laptop {stamp}",
        "model": "MacBook Pro 16",
        "serial_number": f"PROBE{stamp}",
        "category": "laptop",
        "status": "available",
        "condition": "excellent",
    }


def equipment_booking_candidates(
    *, equipment_id: Any, profile_id: Any, today: Optional[date] = None
) -> list[Shape]:
    start = today or date.today()
    end = start + timedelta(days=BOOKING_DAYS)
    start_ts = datetime.combine(start, datetime.min.time(), tzinfo=timezone.utc).isoformat()
    end_ts = datetime.combine(end, datetime.min.time(), tzinfo=timezone.utc).isoformat()
    return [
        {
            "equipment_id": equipment_id,
            "user_id": profile_id,
            "start_datetime": start_ts,
            "end_datetime": end_ts,
            "status": "active",
        },
        {
            "equipment_id": equipment_id,
            "booked_by": profile_id,
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "status": "confirmed",
        },
        {
            "equipment_id": equipment_id,
            "user_id": profile_id,
            "booking_date": start.isoformat(),
            "return_date": end.isoformat(),
            "purpose": "Development work",
            "status": "active",
        },
        {
            "equipment_id": equipment_id,
            "employee_id": profile_id,
            "booking_date": start.isoformat(),
            "status": "booked",
        },
        {
            "item_id": equipment_id,
            "user_id": profile_id,
            "checkout_date": start.isoformat(),
            "expected_return": end.isoformat(),
            "status": "checked_out",
        },
    ]


def safety_incident_candidates(*, profile_id: Any, today: Optional[date] = None) -> list[Shape]:
    day = today or date.today()
    ts = datetime.combine(day, datetime.min.time(), tzinfo=timezone.utc).isoformat()
    return [
        {
            "reported_by": profile_id,
            "incident_type": "near_miss",
            "description": "Probe safety incident report",
            "location": "Office Floor 2",
            "incident_date": day.isoformat(),
            "status": "reported",
        },
        {
            "reporter_id": profile_id,
            "type": "safety_violation",
            "details": "Probe incident details",
            "occurred_at": ts,
            "severity": "low",
            "status": "open",
        },
        {
            "user_id": profile_id,
            "title": "Safety Incident Report",
            "description": "Probe incident description",
            "date_reported": ts,
            "status": "pending",
        },
        {
            "employee_id": profile_id,
            "incident_description": "Equipment malfunction reported",
            "report_date": day.isoformat(),
            "status": "submitted",
        },
        {
            "reporter": profile_id,
            "summary": "Safety concern report",
            "created_at": ts,
            "state": "new",
        },
    ]


# table -> builder(context) ; context carries the ids the shapes reference.
PROBE_CATALOG: Mapping[str, Callable[[Mapping[str, Any]], list[Shape]]] = {
    "equipment_bookings": lambda ctx: equipment_booking_candidates(
        equipment_id=ctx["equipment_id"], profile_id=ctx["profile_id"]
    ),
    "safety_incidents": lambda ctx: safety_incident_candidates(profile_id=ctx["profile_id"]),
}
