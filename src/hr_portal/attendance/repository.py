from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceListRow, AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: str, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert_check_in(self, *, user_id: str, day: date, check_in: datetime, status: AttendanceStatus) -> None:
        """Insert or overwrite check_in/status for (user_id, day)."""

        raise NotImplementedError

    def update_check_out(self, *, user_id: str, day: date, check_out: datetime) -> bool:
        """Never inserts. Returns False when no row exists for (user_id, day)."""

        raise NotImplementedError

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Rows with start_date <= date <= end_date, newest date first."""

        raise NotImplementedError

    def list_range_with_profiles(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[str] = None,
    ) -> Sequence[AttendanceListRow]:
        raise NotImplementedError

    def count_for_date(self, *, day: date, status: AttendanceStatus) -> int:
        raise NotImplementedError
