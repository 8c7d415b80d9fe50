from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Application role stored in user_roles.role."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Attendance status as persisted in attendance.status."""

    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half-day"
    LEAVE = "leave"


class LeaveStatus(str, Enum):
    """Review lifecycle of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PeriodView(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
