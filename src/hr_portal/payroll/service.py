from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_amount
from ..core.context import RequestContext
from ..core.exceptions import WriteError
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollRecord, PayrollRow
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


def _money(value: Decimal) -> str:
    return f"{value:.2f}"


class PayrollService:
    def __init__(
        self,
        payroll: PayrollRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payroll = payroll
        self._calculator = calculator or StandardPayrollCalculator()

    def get_mine(self, ctx: RequestContext) -> Optional[PayrollRecord]:
        return self._payroll.get_for_user(ctx.user_id)

    def list_all(self, ctx: RequestContext, *, search: str = "") -> dict:
        """Rows matching ``search`` plus ``total_net`` over every row."""
        ctx.require_admin()
        rows = list(self._payroll.list_with_profiles())
        total_net = sum((r.record.net_salary for r in rows), Decimal("0"))

        term = (search or "").strip().lower()
        if term:
            rows = [
                r
                for r in rows
                if any(term in (v or "").lower() for v in (r.first_name, r.last_name, r.employee_id))
            ]
        return {"rows": rows, "total_net": total_net}

    def update(
        self,
        ctx: RequestContext,
        *,
        payroll_id: str,
        basic_salary: Any,
        allowances: Any,
        deductions: Any,
        today: date | None = None,
        now: datetime | None = None,
    ) -> Decimal:
        ctx.require_admin()
        basic = require_amount(basic_salary, "Basic salary")
        allow = require_amount(allowances, "Allowances")
        deduct = require_amount(deductions, "Deductions")

        net = self._calculator.net_salary(basic_salary=basic, allowances=allow, deductions=deduct)
        now = now or now_local()
        ok = self._payroll.update(
            payroll_id=payroll_id,
            basic_salary=basic,
            allowances=allow,
            deductions=deduct,
            net_salary=net,
            effective_date=today or now.date(),
            updated_at=now,
        )
        if not ok:
            raise WriteError("Payroll update failed")
        logger.info("payroll updated id=%s by=%s net=%s", payroll_id, ctx.user_id, _money(net))
        return net

    @staticmethod
    def to_ui(r: PayrollRecord) -> dict:
        return {
            "id": r.id,
            "user_id": r.user_id,
            "basic_salary": _money(r.basic_salary),
            "allowances": _money(r.allowances),
            "deductions": _money(r.deductions),
            "net_salary": _money(r.net_salary),
            "effective_date": r.effective_date.isoformat() if r.effective_date else None,
        }

    def row_to_ui(self, row: PayrollRow) -> dict:
        out = self.to_ui(row.record)
        out.update(
            {
                "employee_name": " ".join(p for p in (row.first_name, row.last_name) if p) or "-",
                "employee_id": row.employee_id or "-",
                "department": row.department or "-",
                "position": row.position or "-",
            }
        )
        return out
