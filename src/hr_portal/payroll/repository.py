from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import PayrollRecord, PayrollRow


class PayrollRepository(Protocol):
    def get_for_user(self, user_id: str) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def list_with_profiles(self) -> Sequence[PayrollRow]:
        """All payroll rows, newest first."""

        raise NotImplementedError

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
        raise NotImplementedError
