from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local, period_bounds
from ..common.validators import require_date_order
from ..core.context import RequestContext
from ..core.enums import AttendanceStatus, PeriodView
from ..core.exceptions import ValidationError, WriteError
from ..profiles.repository import ProfileRepository
from .model import AttendanceListRow, AttendanceRecord, DayStats
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

EMPLOYEE_VIEWS = frozenset({PeriodView.WEEK, PeriodView.MONTH})
ADMIN_VIEWS = frozenset({PeriodView.DAY, PeriodView.WEEK})

STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.ABSENT: "Absent",
    AttendanceStatus.HALF_DAY: "Half-day",
    AttendanceStatus.LEAVE: "Leave",
}


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, profiles: ProfileRepository):
        self._attendance = attendance
        self._profiles = profiles

    def check_in(self, ctx: RequestContext, *, now: datetime | None = None) -> None:
        """Upsert today's row with check_in=now.

        A repeated check-in overwrites the earlier timestamp.
        """
        now = now or now_local()
        self._attendance.upsert_check_in(
            user_id=ctx.user_id,
            day=now.date(),
            check_in=now,
            status=AttendanceStatus.PRESENT,
        )
        logger.info("check-in user=%s date=%s at=%s", ctx.user_id, now.date(), now.isoformat())

    def check_out(self, ctx: RequestContext, *, now: datetime | None = None) -> None:
        now = now or now_local()
        updated = self._attendance.update_check_out(user_id=ctx.user_id, day=now.date(), check_out=now)
        if not updated:
            raise WriteError("Check-out failed: no check-in recorded for today")
        logger.info("check-out user=%s date=%s at=%s", ctx.user_id, now.date(), now.isoformat())

    def get_today_record(self, ctx: RequestContext, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(ctx.user_id, today)

    def fetch_for_period(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[str] = None,
    ) -> list[AttendanceRecord]:
        require_date_order(start_date, end_date)
        return list(self._attendance.list_range(start_date=start_date, end_date=end_date, user_id=user_id))

    def my_attendance(self, ctx: RequestContext, *, view: PeriodView, selected: date, today: date) -> dict:
        if view not in EMPLOYEE_VIEWS:
            raise ValidationError(f"Unsupported view: {view.value}")

        start, end = period_bounds(view, selected)
        today_record = self.get_today_record(ctx, today)
        records = self.fetch_for_period(start_date=start, end_date=end, user_id=ctx.user_id)
        return {
            "view": view.value,
            "start": start.isoformat(),
            "end": end.isoformat(),
            "today": self.to_ui(today_record) if today_record else None,
            "records": [self.to_ui(r) for r in records],
        }

    def admin_attendance(
        self,
        ctx: RequestContext,
        *,
        view: PeriodView,
        selected: date,
        user_id: Optional[str] = None,
    ) -> dict:
        ctx.require_admin()
        if view not in ADMIN_VIEWS:
            raise ValidationError(f"Unsupported view: {view.value}")

        start, end = period_bounds(view, selected)
        rows = self._attendance.list_range_with_profiles(start_date=start, end_date=end, user_id=user_id)
        stats = self._day_stats(selected, rows)
        return {
            "view": view.value,
            "start": start.isoformat(),
            "end": end.isoformat(),
            "stats": {
                "date": stats.day.isoformat(),
                "total_employees": stats.total_employees,
                "present": stats.present,
                "leave": stats.leave,
                "absent": stats.absent,
            },
            "records": [self._list_row_to_ui(r) for r in rows],
        }

    def _day_stats(self, day: date, rows) -> DayStats:
        total = self._profiles.count_all()
        on_day = [r.record for r in rows if r.record.date == day]
        present = sum(1 for r in on_day if r.status == AttendanceStatus.PRESENT)
        leave = sum(1 for r in on_day if r.status == AttendanceStatus.LEAVE)
        return DayStats(
            day=day,
            total_employees=total,
            present=present,
            leave=leave,
            absent=max(total - (present + leave), 0),
        )

    def day_stats(self, ctx: RequestContext, day: date) -> DayStats:
        ctx.require_admin()
        rows = self._attendance.list_range_with_profiles(start_date=day, end_date=day)
        return self._day_stats(day, rows)

    @staticmethod
    def to_ui(r: AttendanceRecord) -> dict:
        return {
            "id": r.id,
            "user_id": r.user_id,
            "date": r.date.isoformat(),
            "check_in": r.check_in.isoformat() if r.check_in else None,
            "check_out": r.check_out.isoformat() if r.check_out else None,
            "status": r.status.value if r.status else None,
            "status_label": STATUS_LABELS[r.status] if r.status else "-",
        }

    def _list_row_to_ui(self, row: AttendanceListRow) -> dict:
        out = self.to_ui(row.record)
        out.update(
            {
                "employee_name": " ".join(p for p in (row.first_name, row.last_name) if p) or "-",
                "employee_id": row.employee_id or "-",
                "department": row.department or "-",
            }
        )
        return out
