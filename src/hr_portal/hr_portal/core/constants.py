"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_LIST_LIMIT = 50

# Suite verdict thresholds (percent of passed stages).
SUCCESS_PASS_RATE = 75
PARTIAL_PASS_RATE = 50

# Share of accessible tables below which the store is reported as failing.
DEGRADED_TABLE_RATIO = 0.8

PRIMARY_KEY = "id"

# Tables the portal pages rely on; checked by the health checker.
CRITICAL_TABLES = (
    "profiles",
    "departments",
    "job_postings",
    "job_applications",
    "leave_requests",
    "assets",
    "equipment_bookings",
    "safety_incidents",
    "training_courses",
    "payroll_records",
)

# Every table the maintenance scripts have ever touched.
KNOWN_TABLES = (
    "profiles",
    "teams",
    "projects",
    "team_members",
    "project_members",
    "meeting_rooms",
    "room_bookings",
    "bookable_equipment",
    "equipment_bookings",
    "travel_requests",
    "unified_requests",
    "chat_channels",
    "chat_messages",
    "chat_members",
    "message_reactions",
    "leave_requests",
    "loan_applications",
    "payroll_records",
    "training_courses",
    "training_enrollments",
    "safety_incidents",
    "expense_reports",
    "job_postings",
    "job_applications",
    "interviews",
    "performance_reviews",
    "departments",
    "employee_documents",
    "assets",
    "wellness_programs",
)
