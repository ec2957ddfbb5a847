"""Demo organisation used to seed an empty portal.

No passwords live here: the loader takes them from settings or generates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class DemoDepartment:
    name: str
    description: str

    def record(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description}


@dataclass(frozen=True)
class DemoUser:
    email: str
    first_name: str
    last_name: str
    role: Role
    department: str
    position: str
    phone: str
    hire_date: str
    manager_email: Optional[str] = None

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def profile_record(self) -> dict[str, Any]:
        return {
            "email": self.email,
            "name": self.name,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "role": self.role.value,
            "department": self.department,
            "position": self.position,
            "phone": self.phone,
            "hire_date": self.hire_date,
        }


@dataclass(frozen=True)
class DemoTeam:
    name: str
    department: str
    description: str
    lead_email: str
    member_emails: tuple[str, ...] = ()


@dataclass(frozen=True)
class SeedFixtures:
    departments: tuple[DemoDepartment, ...] = ()
    users: tuple[DemoUser, ...] = ()
    teams: tuple[DemoTeam, ...] = field(default_factory=tuple)


DEMO_DEPARTMENTS = (
    DemoDepartment("IT", "Engineering and internal systems"),
    DemoDepartment("Human Resources", "People operations and recruitment"),
    DemoDepartment("Finance", "Accounting, payroll and loans"),
    DemoDepartment("Sales", "Customer acquisition"),
)

DEMO_USERS = (
    DemoUser("admin@hrportal.com", "System", "Administrator", Role.ADMIN, "IT", "System Admin", "+1-555-0001", "2023-01-01"),
    DemoUser("hr.manager@hrportal.com", "Sarah", "Johnson", Role.HR_MANAGER, "Human Resources", "HR Manager", "+1-555-0002", "2023-02-01"),
    DemoUser("hr.specialist@hrportal.com", "Mike", "Chen", Role.HR_SPECIALIST, "Human Resources", "HR Specialist", "+1-555-0003", "2023-03-01", manager_email="hr.manager@hrportal.com"),
    DemoUser("it.manager@hrportal.com", "David", "Rodriguez", Role.MANAGER, "IT", "IT Manager", "+1-555-0004", "2023-01-15"),
    DemoUser("developer1@hrportal.com", "Alice", "Thompson", Role.EMPLOYEE, "IT", "Senior Developer", "+1-555-0005", "2023-04-01", manager_email="it.manager@hrportal.com"),
    DemoUser("developer2@hrportal.com", "Bob", "Wilson", Role.EMPLOYEE, "IT", "Frontend Developer", "+1-555-0006", "2023-05-01", manager_email="it.manager@hrportal.com"),
    DemoUser("finance.manager@hrportal.com", "Jennifer", "Smith", Role.MANAGER, "Finance", "Finance Manager", "+1-555-0007", "2023-02-15"),
    DemoUser("accountant@hrportal.com", "Robert", "Davis", Role.EMPLOYEE, "Finance", "Senior Accountant", "+1-555-0008", "2023-06-01", manager_email="finance.manager@hrportal.com"),
    DemoUser("sales.manager@hrportal.com", "Lisa", "Anderson", Role.MANAGER, "Sales", "Sales Manager", "+1-555-0009", "2023-03-15"),
    DemoUser("sales.rep@hrportal.com", "Tom", "Jackson", Role.EMPLOYEE, "Sales", "Sales Representative", "+1-555-0010", "2023-07-01", manager_email="sales.manager@hrportal.com"),
)

DEMO_TEAMS = (
    DemoTeam(
        "Platform",
        "IT",
        "Portal backend and infrastructure",
        lead_email="it.manager@hrportal.com",
        member_emails=("developer1@hrportal.com", "developer2@hrportal.com"),
    ),
    DemoTeam(
        "People Ops",
        "Human Resources",
        "Recruitment, onboarding and leave",
        lead_email="hr.manager@hrportal.com",
        member_emails=("hr.specialist@hrportal.com",),
    ),
    DemoTeam(
        "Revenue",
        "Sales",
        "Sales and finance liaison",
        lead_email="sales.manager@hrportal.com",
        member_emails=("sales.rep@hrportal.com", "accountant@hrportal.com"),
    ),
)

DEMO_FIXTURES = SeedFixtures(departments=DEMO_DEPARTMENTS, users=DEMO_USERS, teams=DEMO_TEAMS)
