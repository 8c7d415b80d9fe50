from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

import pytest

from hr_portal.attendance.model import AttendanceListRow, AttendanceRecord
from hr_portal.core.context import RequestContext
from hr_portal.core.enums import AttendanceStatus, LeaveStatus, Role
from hr_portal.leaves.model import LeaveRequest, LeaveRequestRow, LeaveType
from hr_portal.payroll.model import PayrollRecord, PayrollRow
from hr_portal.profiles.model import EmployeeRow, Profile

ADMIN_ID = "u-admin"
EMPLOYEE_ID = "u-emp"


class FakeAttendanceRepo:
    """Keyed on (user_id, date), so one row per pair like the unique index."""

    def __init__(self, profiles: "FakeProfileRepo | None" = None):
        self.rows: dict[tuple[str, date], AttendanceRecord] = {}
        self._profiles = profiles
        self._next = 1

    def _new_id(self) -> str:
        rid = f"a-{self._next}"
        self._next += 1
        return rid

    def get_for_user_and_date(self, user_id, day):
        return self.rows.get((user_id, day))

    def upsert_check_in(self, *, user_id, day, check_in, status):
        old = self.rows.get((user_id, day))
        if old:
            self.rows[(user_id, day)] = replace(old, check_in=check_in, status=status)
        else:
            self.rows[(user_id, day)] = AttendanceRecord(
                id=self._new_id(), user_id=user_id, date=day, check_in=check_in, check_out=None, status=status
            )

    def update_check_out(self, *, user_id, day, check_out):
        old = self.rows.get((user_id, day))
        if not old:
            return False
        self.rows[(user_id, day)] = replace(old, check_out=check_out)
        return True

    def upsert_leave_days(self, *, user_id, days):
        """Same effect as the multi-row upsert run inside the approval transaction."""
        for day in days:
            old = self.rows.get((user_id, day))
            if old:
                self.rows[(user_id, day)] = replace(old, status=AttendanceStatus.LEAVE)
            else:
                self.rows[(user_id, day)] = AttendanceRecord(
                    id=self._new_id(), user_id=user_id, date=day, check_in=None, check_out=None,
                    status=AttendanceStatus.LEAVE,
                )
        return len(days)

    def list_range(self, *, start_date, end_date, user_id=None):
        out = [
            r for (uid, d), r in self.rows.items()
            if start_date <= d <= end_date and (user_id is None or uid == user_id)
        ]
        return sorted(out, key=lambda r: r.date, reverse=True)

    def list_range_with_profiles(self, *, start_date, end_date, user_id=None):
        out = []
        for r in self.list_range(start_date=start_date, end_date=end_date, user_id=user_id):
            p = self._profiles.get_by_user_id(r.user_id) if self._profiles else None
            out.append(
                AttendanceListRow(
                    record=r,
                    first_name=p.first_name if p else None,
                    last_name=p.last_name if p else None,
                    employee_id=p.employee_id if p else None,
                    department=p.department if p else None,
                )
            )
        return out

    def count_for_date(self, *, day, status):
        return sum(1 for (_, d), r in self.rows.items() if d == day and r.status == status)


class FakeProfileRepo:
    def __init__(self, profiles=(), roles: "FakeRoleRepo | None" = None):
        self.profiles: dict[str, Profile] = {p.id: p for p in profiles}
        self._roles = roles

    def get_by_user_id(self, user_id):
        return next((p for p in self.profiles.values() if p.user_id == user_id), None)

    def list_with_roles(self):
        rows = [
            EmployeeRow(profile=p, role=(self._roles.get_role(p.user_id) if self._roles else None) or Role.EMPLOYEE)
            for p in self.profiles.values()
        ]
        return sorted(rows, key=lambda r: r.profile.first_name)

    def count_all(self):
        return len(self.profiles)

    def update_contact(self, *, user_id, phone, address, updated_at):
        p = self.get_by_user_id(user_id)
        if not p:
            return False
        self.profiles[p.id] = replace(p, phone=phone, address=address, updated_at=updated_at)
        return True

    def admin_update(self, *, profile_id, department, position, phone, address, updated_at):
        p = self.profiles.get(profile_id)
        if not p:
            return False
        self.profiles[profile_id] = replace(
            p, department=department, position=position, phone=phone, address=address, updated_at=updated_at
        )
        return True


class FakeRoleRepo:
    def __init__(self, roles=None):
        self.roles: dict[str, Role] = dict(roles or {})

    def get_role(self, user_id):
        return self.roles.get(user_id)


class FakeLeaveRepo:
    """Approval writes the request and attendance together or not at all."""

    def __init__(self, attendance: FakeAttendanceRepo, profiles: FakeProfileRepo | None = None, types=()):
        self.attendance = attendance
        self._profiles = profiles
        self.types: dict[str, LeaveType] = {t.id: t for t in types}
        self.requests: dict[str, LeaveRequest] = {}
        self.fail_attendance_write = False
        self._next = 1

    def list_types(self):
        return sorted(self.types.values(), key=lambda t: t.name)

    def get_type(self, leave_type_id):
        return self.types.get(leave_type_id)

    def create(self, *, user_id, leave_type_id, start_date, end_date, remarks):
        rid = f"lr-{self._next}"
        self._next += 1
        self.requests[rid] = LeaveRequest(
            id=rid,
            user_id=user_id,
            leave_type_id=leave_type_id,
            start_date=start_date,
            end_date=end_date,
            status=LeaveStatus.PENDING,
            remarks=remarks,
            created_at=datetime(2024, 1, 1, 8, 0, self._next % 60),
        )
        return rid

    def get(self, request_id):
        return self.requests.get(request_id)

    def _row(self, r: LeaveRequest) -> LeaveRequestRow:
        t = self.types.get(r.leave_type_id)
        p = self._profiles.get_by_user_id(r.user_id) if self._profiles else None
        return LeaveRequestRow(
            request=r,
            leave_type_name=t.name if t else None,
            first_name=p.first_name if p else None,
            last_name=p.last_name if p else None,
            employee_id=p.employee_id if p else None,
            department=p.department if p else None,
        )

    def list_for_user(self, user_id):
        rows = [r for r in self.requests.values() if r.user_id == user_id]
        rows.sort(key=lambda r: r.created_at, reverse=True)
        return [replace(self._row(r), first_name=None, last_name=None, employee_id=None, department=None) for r in rows]

    def list_all_with_profiles(self):
        rows = sorted(self.requests.values(), key=lambda r: r.created_at, reverse=True)
        return [self._row(r) for r in rows]

    def count_pending(self, *, user_id=None):
        return sum(
            1 for r in self.requests.values()
            if r.status == LeaveStatus.PENDING and (user_id is None or r.user_id == user_id)
        )

    def _decide(self, request_id, status, reviewer_id, comment, reviewed_at):
        r = self.requests.get(request_id)
        if not r or r.status != LeaveStatus.PENDING:
            return None
        return replace(r, status=status, reviewed_by=reviewer_id, admin_comment=comment, reviewed_at=reviewed_at)

    def reject(self, *, request_id, reviewer_id, comment, reviewed_at):
        updated = self._decide(request_id, LeaveStatus.REJECTED, reviewer_id, comment, reviewed_at)
        if not updated:
            return False
        self.requests[request_id] = updated
        return True

    def approve(self, *, request_id, reviewer_id, comment, reviewed_at, user_id, days):
        updated = self._decide(request_id, LeaveStatus.APPROVED, reviewer_id, comment, reviewed_at)
        if not updated:
            return False
        if self.fail_attendance_write:
            raise RuntimeError("attendance write failed")
        self.attendance.upsert_leave_days(user_id=user_id, days=days)
        self.requests[request_id] = updated
        return True


class FakePayrollRepo:
    def __init__(self, records=(), profiles: FakeProfileRepo | None = None):
        self.records: dict[str, PayrollRecord] = {r.id: r for r in records}
        self._profiles = profiles

    def get_for_user(self, user_id):
        return next((r for r in self.records.values() if r.user_id == user_id), None)

    def list_with_profiles(self):
        out = []
        for r in self.records.values():
            p = self._profiles.get_by_user_id(r.user_id) if self._profiles else None
            out.append(
                PayrollRow(
                    record=r,
                    first_name=p.first_name if p else None,
                    last_name=p.last_name if p else None,
                    employee_id=p.employee_id if p else None,
                    department=p.department if p else None,
                    position=p.position if p else None,
                )
            )
        return out

    def update(self, *, payroll_id, basic_salary, allowances, deductions, net_salary, effective_date, updated_at):
        r = self.records.get(payroll_id)
        if not r:
            return False
        self.records[payroll_id] = replace(
            r,
            basic_salary=basic_salary,
            allowances=allowances,
            deductions=deductions,
            net_salary=net_salary,
            effective_date=effective_date,
            updated_at=updated_at,
        )
        return True


def make_profile(pid, user_id, employee_id, first, last, email, **kw):
    return Profile(id=pid, user_id=user_id, employee_id=employee_id, first_name=first, last_name=last, email=email, **kw)


@pytest.fixture()
def admin_ctx():
    return RequestContext(user_id=ADMIN_ID, role=Role.ADMIN)


@pytest.fixture()
def employee_ctx():
    return RequestContext(user_id=EMPLOYEE_ID, role=Role.EMPLOYEE)


@pytest.fixture()
def roles_repo():
    return FakeRoleRepo({ADMIN_ID: Role.ADMIN, EMPLOYEE_ID: Role.EMPLOYEE})


@pytest.fixture()
def profiles_repo(roles_repo):
    return FakeProfileRepo(
        [
            make_profile("p-1", ADMIN_ID, "EMP001", "Alice", "Admin", "alice@example.com", department="HR"),
            make_profile("p-2", EMPLOYEE_ID, "EMP002", "Bob", "Builder", "bob@example.com", department="Engineering"),
        ],
        roles=roles_repo,
    )


@pytest.fixture()
def attendance_repo(profiles_repo):
    return FakeAttendanceRepo(profiles_repo)


@pytest.fixture()
def leaves_repo(attendance_repo, profiles_repo):
    return FakeLeaveRepo(
        attendance_repo,
        profiles_repo,
        types=[
            LeaveType(id="lt-annual", name="Annual Leave", days_per_year=12),
            LeaveType(id="lt-sick", name="Sick Leave", days_per_year=10),
        ],
    )


@pytest.fixture()
def payroll_repo(profiles_repo):
    return FakePayrollRepo(
        [
            PayrollRecord(
                id="pr-1", user_id=ADMIN_ID, basic_salary=Decimal("5000.00"), allowances=Decimal("500.00"),
                deductions=Decimal("200.00"), net_salary=Decimal("5300.00"),
            ),
            PayrollRecord(
                id="pr-2", user_id=EMPLOYEE_ID, basic_salary=Decimal("3000.00"), allowances=Decimal("0.00"),
                deductions=Decimal("100.00"), net_salary=Decimal("2900.00"),
            ),
        ],
        profiles=profiles_repo,
    )
