from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import date

from ..attendance.repository import AttendanceRepository
from ..attendance.service import AttendanceService
from ..core.constants import DASHBOARD_WORKERS
from ..core.context import RequestContext
from ..core.enums import AttendanceStatus
from ..leaves.repository import LeaveRepository
from ..profiles.repository import ProfileRepository


class DashboardService:
    """Landing-page counters for both roles."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        profiles: ProfileRepository,
        *,
        max_workers: int = DASHBOARD_WORKERS,
    ):
        self._attendance = attendance
        self._leaves = leaves
        self._profiles = profiles
        self._max_workers = max_workers

    def employee_summary(self, ctx: RequestContext, today: date) -> dict:
        record = self._attendance.get_for_user_and_date(ctx.user_id, today)
        return {
            "today": AttendanceService.to_ui(record) if record else None,
            "checked_in": bool(record and record.check_in),
            "my_pending_leaves": self._leaves.count_pending(user_id=ctx.user_id),
        }

    def admin_summary(self, ctx: RequestContext, today: date) -> dict:
        ctx.require_admin()
        record = self._attendance.get_for_user_and_date(ctx.user_id, today)

        # Independent reads; each opens its own connection.
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            total_f = pool.submit(self._profiles.count_all)
            pending_f = pool.submit(self._leaves.count_pending)
            present_f = pool.submit(self._attendance.count_for_date, day=today, status=AttendanceStatus.PRESENT)
            total, pending, present = total_f.result(), pending_f.result(), present_f.result()

        return {
            "today": AttendanceService.to_ui(record) if record else None,
            "checked_in": bool(record and record.check_in),
            "total_employees": total,
            "pending_leaves": pending,
            "today_present": present,
        }

    def summary(self, ctx: RequestContext, today: date) -> dict:
        if ctx.is_admin:
            return self.admin_summary(ctx, today)
        return self.employee_summary(ctx, today)
