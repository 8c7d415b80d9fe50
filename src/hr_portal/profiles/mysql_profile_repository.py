from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import EmployeeRow, Profile
from .repository import ProfileRepository

_COLUMNS = """
    p.id, p.user_id, p.employee_id, p.first_name, p.last_name, p.email,
    p.phone, p.address, p.department, p.position, p.hire_date,
    p.profile_picture, p.created_at, p.updated_at
"""


def _to_profile(r: Dict[str, Any]) -> Profile:
    return Profile(
        id=r["id"],
        user_id=r["user_id"],
        employee_id=r["employee_id"],
        first_name=r["first_name"],
        last_name=r["last_name"],
        email=r["email"],
        phone=r.get("phone"),
        address=r.get("address"),
        department=r.get("department"),
        position=r.get("position"),
        hire_date=r.get("hire_date"),
        profile_picture=r.get("profile_picture"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles p WHERE p.user_id=%s", (user_id,))
            r = fetchone(cur)
            return _to_profile(r) if r else None

    def list_with_roles(self) -> Sequence[EmployeeRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS},
                       CASE WHEN SUM(ur.role = 'admin') > 0 THEN 'admin' ELSE 'employee' END AS role
                FROM profiles p
                LEFT JOIN user_roles ur ON ur.user_id = p.user_id
                GROUP BY p.id
                ORDER BY p.first_name
                """
            )
            return [EmployeeRow(profile=_to_profile(r), role=Role(r["role"])) for r in fetchall(cur)]

    def count_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM profiles")
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def update_contact(self, *, user_id: str, phone: Optional[str], address: Optional[str], updated_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE profiles
                SET phone=%s, address=%s, updated_at=%s
                WHERE user_id=%s
                """,
                (phone, address, updated_at, user_id),
            )
            return cur.rowcount > 0

    def admin_update(
        self,
        *,
        profile_id: str,
        department: Optional[str],
        position: Optional[str],
        phone: Optional[str],
        address: Optional[str],
        updated_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE profiles
                SET department=%s, position=%s, phone=%s, address=%s, updated_at=%s
                WHERE id=%s
                """,
                (department, position, phone, address, updated_at, profile_id),
            )
            return cur.rowcount > 0
