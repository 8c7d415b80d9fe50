from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (user_id, date)."""

    id: str
    user_id: str
    date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: Optional[AttendanceStatus]
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceListRow:
    """Read-model for the admin attendance table (joined with profiles)."""

    record: AttendanceRecord
    first_name: Optional[str]
    last_name: Optional[str]
    employee_id: Optional[str]
    department: Optional[str]


@dataclass(frozen=True)
class DayStats:
    day: date
    total_employees: int
    present: int
    leave: int
    absent: int
