from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import LeaveRequest, LeaveRequestRow, LeaveType


class LeaveRepository(Protocol):
    def list_types(self) -> Sequence[LeaveType]:
        raise NotImplementedError

    def get_type(self, leave_type_id: str) -> Optional[LeaveType]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: str,
        leave_type_id: str,
        start_date: date,
        end_date: date,
        remarks: Optional[str],
    ) -> str:
        raise NotImplementedError

    def get(self, request_id: str) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[LeaveRequestRow]:
        raise NotImplementedError

    def list_all_with_profiles(self) -> Sequence[LeaveRequestRow]:
        raise NotImplementedError

    def count_pending(self, *, user_id: Optional[str] = None) -> int:
        raise NotImplementedError

    def reject(
        self,
        *,
        request_id: str,
        reviewer_id: str,
        comment: Optional[str],
        reviewed_at: datetime,
    ) -> bool:
        """Guarded pending -> rejected. False when no pending row matched."""

        raise NotImplementedError

    def approve(
        self,
        *,
        request_id: str,
        reviewer_id: str,
        comment: Optional[str],
        reviewed_at: datetime,
        user_id: str,
        days: Sequence[date],
    ) -> bool:
        """Guarded pending -> approved plus one `leave` attendance row per day.

        Both writes share one transaction. False (and nothing written) when no
        pending row matched.
        """

        raise NotImplementedError
