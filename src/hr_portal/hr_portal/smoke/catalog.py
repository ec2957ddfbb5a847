from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Optional

from .model import SmokeCase


def module_cases(profile_id: Any, *, today: Optional[date] = None) -> list[SmokeCase]:
    """Smoke cases for the portal modules, built around one existing profile."""
    day = today or date.today()
    month_start = day.replace(day=1)
    month_end = (month_start + timedelta(days=32)).replace(day=1) - timedelta(days=1)

    return [
        SmokeCase(
            module="Leave Management",
            table="leave_requests",
            record={
                "employee_id": profile_id,
                "leave_type": "vacation",
                "start_date": (day + timedelta(days=14)).isoformat(),
                "end_date": (day + timedelta(days=18)).isoformat(),
                "days_requested": 5,
                "reason": "Family vacation",
                "status": "pending",
            },
            update={"status": "approved", "reason": "Family vacation - Updated"},
        ),
        SmokeCase(
            module="Loan Management",
            table="loan_applications",
            record={
                "employee_id": profile_id,
                "loan_type": "personal",
                "amount_requested": 5000.0,
                "purpose": "Home improvement",
                "repayment_period": 12,
                "monthly_installment": 450.0,
                "status": "pending",
            },
            update={"status": "approved", "amount_approved": 4500.0},
        ),
        SmokeCase(
            module="Payroll",
            table="payroll_records",
            record={
                "employee_id": profile_id,
                "pay_period_start": month_start.isoformat(),
                "pay_period_end": month_end.isoformat(),
                "basic_salary": 5000.0,
                "overtime_hours": 8,
                "overtime_rate": 25.0,
                "allowances": 500.0,
                "deductions": 200.0,
                "gross_pay": 5800.0,
                "net_pay": 5600.0,
                "status": "calculated",
            },
            update={"status": "processed", "net_pay": 5650.0},
        ),
        SmokeCase(
            module="Training",
            table="training_courses",
            record={
                "title": "Workplace Safety Basics",
                "description": "Mandatory safety onboarding",
                "category": "compliance",
                "duration_hours": 4,
                "status": "active",
            },
            update={"status": "archived"},
        ),
        SmokeCase(
            module="Expenses",
            table="expense_reports",
            record={
                "employee_id": profile_id,
                "title": "Client visit",
                "amount": 245.5,
                "category": "travel",
                "expense_date": day.isoformat(),
                "status": "submitted",
            },
            update={"status": "approved"},
        ),
        SmokeCase(
            module="Recruitment",
            table="job_postings",
            record={
                "title": "Backend Engineer",
                "department": "IT",
                "location": "Remote",
                "employment_type": "full_time",
                "description": "Build and run the HR portal services",
                "status": "draft",
            },
            update={"status": "published"},
        ),
        SmokeCase(
            module="Performance",
            table="performance_reviews",
            record={
                "employee_id": profile_id,
                "reviewer_id": profile_id,
                "review_period": f"{day.year}-H{1 if day.month <= 6 else 2}",
                "overall_rating": 4,
                "status": "draft",
            },
            update={"status": "completed"},
        ),
    ]
