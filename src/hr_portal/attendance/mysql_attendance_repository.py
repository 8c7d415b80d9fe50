from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id
from .model import AttendanceListRow, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "a.id, a.user_id, a.date, a.check_in, a.check_out, a.status, a.created_at"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        id=r["id"],
        user_id=r["user_id"],
        date=r["date"],
        check_in=r.get("check_in"),
        check_out=r.get("check_out"),
        status=AttendanceStatus(r["status"]) if r.get("status") else None,
        created_at=r.get("created_at"),
    )


def upsert_leave_days(cur, *, user_id: str, days: Sequence[date]) -> int:
    """Multi-row upsert of status='leave' on (user_id, date), on an open cursor.

    Shared with the leave approval transaction so both writes commit together.
    """
    if not days:
        return 0

    placeholders = ",".join(["(%s,%s,%s,%s)"] * len(days))
    params: list[object] = []
    for day in days:
        params.extend([new_id(), user_id, day, AttendanceStatus.LEAVE.value])

    cur.execute(
        f"""
        INSERT INTO attendance(id, user_id, date, status)
        VALUES {placeholders}
        ON DUPLICATE KEY UPDATE status=VALUES(status)
        """,
        tuple(params),
    )
    return len(days)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: str, day: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance a
                WHERE a.user_id=%s AND a.date=%s
                """,
                (user_id, day),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def upsert_check_in(self, *, user_id: str, day: date, check_in: datetime, status: AttendanceStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(id, user_id, date, check_in, status)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE check_in=VALUES(check_in), status=VALUES(status)
                """,
                (new_id(), user_id, day, check_in, status.value),
            )

    def update_check_out(self, *, user_id: str, day: date, check_out: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out=%s
                WHERE user_id=%s AND date=%s
                """,
                (check_out, user_id, day),
            )
            return cur.rowcount > 0

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["a.date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if user_id is not None:
            clauses.append("a.user_id=%s")
            params.append(user_id)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance a
                WHERE {where}
                ORDER BY a.date DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_range_with_profiles(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[str] = None,
    ) -> Sequence[AttendanceListRow]:
        clauses = ["a.date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if user_id is not None:
            clauses.append("a.user_id=%s")
            params.append(user_id)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS},
                       p.first_name, p.last_name, p.employee_id, p.department
                FROM attendance a
                LEFT JOIN profiles p ON p.user_id = a.user_id
                WHERE {where}
                ORDER BY a.date DESC
                """,
                tuple(params),
            )
            return [
                AttendanceListRow(
                    record=_to_record(r),
                    first_name=r.get("first_name"),
                    last_name=r.get("last_name"),
                    employee_id=r.get("employee_id"),
                    department=r.get("department"),
                )
                for r in fetchall(cur)
            ]

    def count_for_date(self, *, day: date, status: AttendanceStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM attendance WHERE date=%s AND status=%s",
                (day, status.value),
            )
            r = fetchone(cur)
            return int(r["n"]) if r else 0
