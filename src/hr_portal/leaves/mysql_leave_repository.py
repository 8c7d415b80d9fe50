from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..attendance.mysql_attendance_repository import upsert_leave_days
from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id
from .model import LeaveRequest, LeaveRequestRow, LeaveType
from .repository import LeaveRepository

_COLUMNS = """
    lr.id, lr.user_id, lr.leave_type_id, lr.start_date, lr.end_date, lr.status,
    lr.admin_comment, lr.reviewed_by, lr.reviewed_at, lr.remarks, lr.created_at
"""


class _Conflict(Exception):
    """Internal: the guarded update matched no pending row; forces rollback."""


def _to_request(r: Dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        id=r["id"],
        user_id=r["user_id"],
        leave_type_id=r["leave_type_id"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        status=LeaveStatus(r.get("status") or LeaveStatus.PENDING.value),
        admin_comment=r.get("admin_comment"),
        reviewed_by=r.get("reviewed_by"),
        reviewed_at=r.get("reviewed_at"),
        remarks=r.get("remarks"),
        created_at=r.get("created_at"),
    )


def _to_row(r: Dict[str, Any]) -> LeaveRequestRow:
    return LeaveRequestRow(
        request=_to_request(r),
        leave_type_name=r.get("leave_type_name"),
        first_name=r.get("first_name"),
        last_name=r.get("last_name"),
        employee_id=r.get("employee_id"),
        department=r.get("department"),
    )


def _decide(cur, *, request_id: str, status: LeaveStatus, reviewer_id: str, comment: Optional[str], reviewed_at: datetime) -> int:
    cur.execute(
        """
        UPDATE leave_requests
        SET status=%s, admin_comment=%s, reviewed_by=%s, reviewed_at=%s
        WHERE id=%s AND status=%s
        """,
        (status.value, comment, reviewer_id, reviewed_at, request_id, LeaveStatus.PENDING.value),
    )
    return int(cur.rowcount or 0)


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_types(self) -> Sequence[LeaveType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, days_per_year, description FROM leave_types ORDER BY name")
            return [
                LeaveType(id=r["id"], name=r["name"], days_per_year=r.get("days_per_year"), description=r.get("description"))
                for r in fetchall(cur)
            ]

    def get_type(self, leave_type_id: str) -> Optional[LeaveType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, days_per_year, description FROM leave_types WHERE id=%s",
                (leave_type_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return LeaveType(id=r["id"], name=r["name"], days_per_year=r.get("days_per_year"), description=r.get("description"))

    def create(
        self,
        *,
        user_id: str,
        leave_type_id: str,
        start_date: date,
        end_date: date,
        remarks: Optional[str],
    ) -> str:
        request_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(id, user_id, leave_type_id, start_date, end_date, status, remarks)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (request_id, user_id, leave_type_id, start_date, end_date, LeaveStatus.PENDING.value, remarks),
            )
        return request_id

    def get(self, request_id: str) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests lr WHERE lr.id=%s", (request_id,))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_for_user(self, user_id: str) -> Sequence[LeaveRequestRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, lt.name AS leave_type_name
                FROM leave_requests lr
                LEFT JOIN leave_types lt ON lt.id = lr.leave_type_id
                WHERE lr.user_id=%s
                ORDER BY lr.created_at DESC
                """,
                (user_id,),
            )
            return [_to_row(r) for r in fetchall(cur)]

    def list_all_with_profiles(self) -> Sequence[LeaveRequestRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, lt.name AS leave_type_name,
                       p.first_name, p.last_name, p.employee_id, p.department
                FROM leave_requests lr
                LEFT JOIN leave_types lt ON lt.id = lr.leave_type_id
                LEFT JOIN profiles p ON p.user_id = lr.user_id
                ORDER BY lr.created_at DESC
                """
            )
            return [_to_row(r) for r in fetchall(cur)]

    def count_pending(self, *, user_id: Optional[str] = None) -> int:
        sql = "SELECT COUNT(*) AS n FROM leave_requests WHERE status=%s"
        params: list[object] = [LeaveStatus.PENDING.value]
        if user_id is not None:
            sql += " AND user_id=%s"
            params.append(user_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def reject(
        self,
        *,
        request_id: str,
        reviewer_id: str,
        comment: Optional[str],
        reviewed_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            n = _decide(
                cur,
                request_id=request_id,
                status=LeaveStatus.REJECTED,
                reviewer_id=reviewer_id,
                comment=comment,
                reviewed_at=reviewed_at,
            )
            return n > 0

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                n = _decide(
                    cur,
                    request_id=request_id,
                    status=LeaveStatus.APPROVED,
                    reviewer_id=reviewer_id,
                    comment=comment,
                    reviewed_at=reviewed_at,
                )
                if n == 0:
                    raise _Conflict()
                upsert_leave_days(cur, user_id=user_id, days=days)
        except _Conflict:
            return False
        return True
