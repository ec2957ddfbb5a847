"""Validation rules for the form-backed collections.

One ``FormSpec`` per collection the portal pages write to. ``validate`` raises
``ValidationError`` on the first offending field and returns the cleaned payload.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Collection, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import is_blank, require_date_order, require_email
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class FormSpec:
    collection: str
    required: tuple[str, ...] = ()
    email_fields: tuple[str, ...] = ()
    date_order: tuple[tuple[str, str], ...] = ()
    positive: tuple[str, ...] = ()
    choices: Mapping[str, Collection[str]] = field(default_factory=dict)


def _as_date(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value)[:10])
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def validate(form: FormSpec, payload: Mapping[str, Any], *, partial: bool = False) -> dict[str, Any]:
    """Check ``payload`` against ``form``.

    With ``partial=True`` (updates) only the fields present are checked.
    """

    cleaned = {k: (v.strip() if isinstance(v, str) else v) for k, v in payload.items()}

    for name in form.required:
        if partial and name not in cleaned:
            continue
        if is_blank(cleaned.get(name)):
            raise ValidationError(f"{name} is required")

    for name in form.email_fields:
        if name in cleaned and not is_blank(cleaned[name]):
            cleaned[name] = require_email(str(cleaned[name]), name)

    for name, allowed in form.choices.items():
        if name in cleaned and not is_blank(cleaned[name]) and cleaned[name] not in allowed:
            raise ValidationError(f"{name} must be one of: {', '.join(sorted(allowed))}")

    for name in form.positive:
        if name in cleaned and not is_blank(cleaned[name]):
            try:
                number = float(cleaned[name])
            except (TypeError, ValueError):
                raise ValidationError(f"{name} must be a number")
            if number <= 0:
                raise ValidationError(f"{name} must be greater than 0")

    for start_name, end_name in form.date_order:
        start: Optional[Any] = cleaned.get(start_name)
        end: Optional[Any] = cleaned.get(end_name)
        if is_blank(start) or is_blank(end):
            continue
        require_date_order(
            _as_date(start, start_name), _as_date(end, end_name), start_name=start_name, end_name=end_name
        )

    return cleaned


FORMS: dict[str, FormSpec] = {
    form.collection: form
    for form in (
        FormSpec(
            "job_postings",
            required=("title", "department", "location", "job_type", "description"),
            choices={
                "job_type": {"Full-time", "Part-time", "Contract", "Internship"},
                "status": {"draft", "published", "closed"},
            },
        ),
        FormSpec(
            "job_applications",
            required=("job_id", "candidate_name", "candidate_email"),
            email_fields=("candidate_email",),
            choices={"status": {"new", "screening", "interview", "offer", "hired", "rejected"}},
        ),
        FormSpec(
            "interviews",
            required=("application_id", "interviewer_id", "scheduled_at", "interview_type"),
            choices={"interview_type": {"phone", "video", "onsite", "technical"}},
        ),
        FormSpec(
            "leave_requests",
            required=("employee_id", "leave_type", "start_date", "end_date", "days_requested", "reason"),
            date_order=(("start_date", "end_date"),),
            positive=("days_requested",),
        ),
        FormSpec(
            "assets",
            required=("name", "category", "serial_number"),
            choices={"status": {"available", "assigned", "maintenance", "retired"}},
        ),
        FormSpec(
            "wellness_programs",
            required=("title", "start_date", "end_date"),
            date_order=(("start_date", "end_date"),),
            positive=("capacity",),
        ),
    )
}
