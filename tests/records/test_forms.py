from __future__ import annotations

import pytest

from src.hr_portal.hr_portal.core.exceptions import ValidationError
from src.hr_portal.hr_portal.records.forms import FORMS, validate

LEAVE = {
    "employee_id": 1,
    "leave_type": "Annual Leave",
    "start_date": "2026-03-02",
    "end_date": "2026-03-06",
    "days_requested": 5,
    "reason": " Family trip ",
}


def test_valid_leave_request_is_cleaned():
    cleaned = validate(FORMS["leave_requests"], LEAVE)

    assert cleaned["reason"] == "Family trip"


@pytest.mark.parametrize(
    "override, message",
    [
        ({"reason": "   "}, "reason is required"),
        ({"end_date": "2026-03-01"}, "end_date must not be before start_date"),
        ({"days_requested": 0}, "days_requested must be greater than 0"),
        ({"days_requested": "many"}, "days_requested must be a number"),
        ({"start_date": "next week"}, "start_date must be a date"),
    ],
)
def test_invalid_leave_request(override, message):
    with pytest.raises(ValidationError) as exc:
        validate(FORMS["leave_requests"], {**LEAVE, **override})

    assert message in str(exc.value)


def test_choices_and_email_fields():
    with pytest.raises(ValidationError, match="job_type must be one of"):
        validate(
            FORMS["job_postings"],
            {"title": "QA", "department": "IT", "location": "Remote", "job_type": "Gig", "description": "Test"},
        )
    with pytest.raises(ValidationError, match="candidate_email is not a valid email"):
        validate(FORMS["job_applications"], {"job_id": 1, "candidate_name": "Ann", "candidate_email": "ann-at-example"})


def test_partial_update_checks_only_present_fields():
    assert validate(FORMS["leave_requests"], {"status": "approved"}, partial=True) == {"status": "approved"}

    with pytest.raises(ValidationError):
        validate(FORMS["leave_requests"], {"reason": ""}, partial=True)
