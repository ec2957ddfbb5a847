from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Portal roles assigned to demo users."""

    ADMIN = "admin"
    HR_MANAGER = "hr_manager"
    HR_SPECIALIST = "hr_specialist"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class StoreBackend(str, Enum):
    REST = "rest"
    MYSQL = "mysql"
    MEMORY = "memory"


class CrudStage(str, Enum):
    """Stages of a CRUD smoke run, in execution order."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    ERROR = "error"


class SuiteVerdict(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILING = "failing"
