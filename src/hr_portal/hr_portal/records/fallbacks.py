"""Placeholder rows served while the store is unreachable.

Responses carrying these rows are flagged ``degraded`` so pages can say so.
"""

from __future__ import annotations

from typing import Any

FALLBACK_ROWS: dict[str, list[dict[str, Any]]] = {
    "job_postings": [
        {
            "id": "fallback-job-1",
            "title": "Open position",
            "department": "Human Resources",
            "location": "Remote",
            "job_type": "Full-time",
            "status": "published",
        }
    ],
    "job_applications": [
        {
            "id": "fallback-application-1",
            "job_id": "fallback-job-1",
            "candidate_name": "Sample Candidate",
            "candidate_email": "candidate@example.com",
            "status": "new",
        }
    ],
    "interviews": [
        {
            "id": "fallback-interview-1",
            "application_id": "fallback-application-1",
            "interview_type": "video",
            "status": "scheduled",
        }
    ],
    "leave_requests": [
        {
            "id": "fallback-leave-1",
            "leave_type": "Annual Leave",
            "days_requested": 1,
            "status": "pending",
        }
    ],
    "assets": [
        {
            "id": "fallback-asset-1",
            "name": "Laptop",
            "category": "laptop",
            "serial_number": "N/A",
            "status": "available",
        }
    ],
    "wellness_programs": [
        {
            "id": "fallback-wellness-1",
            "title": "Weekly mindfulness session",
            "status": "active",
        }
    ],
}
