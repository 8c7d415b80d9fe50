from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveType:
    id: str
    name: str
    days_per_year: Optional[int] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class LeaveRequest:
    id: str
    user_id: str
    leave_type_id: str
    start_date: date
    end_date: date
    status: LeaveStatus
    admin_comment: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def day_count(self) -> int:
        return (self.end_date - self.start_date).days + 1


@dataclass(frozen=True)
class LeaveRequestRow:
    """Read model for list screens (request + leave type name + owner profile)."""

    request: LeaveRequest
    leave_type_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    employee_id: Optional[str] = None
    department: Optional[str] = None
