from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import PayrollRecord, PayrollRow
from .repository import PayrollRepository

_COLUMNS = """
    pr.id, pr.user_id, pr.basic_salary, pr.allowances, pr.deductions, pr.net_salary,
    pr.effective_date, pr.created_at, pr.updated_at
"""


def _to_record(r: Dict[str, Any]) -> PayrollRecord:
    zero = Decimal("0")
    return PayrollRecord(
        id=r["id"],
        user_id=r["user_id"],
        basic_salary=to_decimal(r.get("basic_salary")) or zero,
        allowances=to_decimal(r.get("allowances")) or zero,
        deductions=to_decimal(r.get("deductions")) or zero,
        net_salary=to_decimal(r.get("net_salary")) or zero,
        effective_date=r.get("effective_date"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user(self, user_id: str) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll pr WHERE pr.user_id=%s", (user_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_with_profiles(self) -> Sequence[PayrollRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS},
                       p.first_name, p.last_name, p.employee_id, p.department, p.position
                FROM payroll pr
                LEFT JOIN profiles p ON p.user_id = pr.user_id
                ORDER BY pr.created_at DESC
                """
            )
            return [
                PayrollRow(
                    record=_to_record(r),
                    first_name=r.get("first_name"),
                    last_name=r.get("last_name"),
                    employee_id=r.get("employee_id"),
                    department=r.get("department"),
                    position=r.get("position"),
                )
                for r in fetchall(cur)
            ]

    def update(
        self,
        *,
        payroll_id: str,
        basic_salary: Decimal,
        allowances: Decimal,
        deductions: Decimal,
        net_salary: Decimal,
        effective_date: date,
        updated_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll
                SET basic_salary=%s, allowances=%s, deductions=%s, net_salary=%s,
                    effective_date=%s, updated_at=%s
                WHERE id=%s
                """,
                (basic_salary, allowances, deductions, net_salary, effective_date, updated_at, payroll_id),
            )
            return cur.rowcount > 0
