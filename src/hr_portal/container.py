from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.mysql_role_repository import MySQLRoleRepository
from .profiles.repository import ProfileRepository
from .profiles.role_repository import RoleRepository
from .profiles.service import ProfileService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    profiles_repo: ProfileRepository
    roles_repo: RoleRepository
    payroll_repo: PayrollRepository

    attendance_service: AttendanceService
    leave_service: LeaveService
    profile_service: ProfileService
    payroll_service: PayrollService
    dashboard_service: DashboardService


def wire(
    *,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    profiles_repo: ProfileRepository,
    roles_repo: RoleRepository,
    payroll_repo: PayrollRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of any repository implementations."""
    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        profiles_repo=profiles_repo,
        roles_repo=roles_repo,
        payroll_repo=payroll_repo,
        attendance_service=AttendanceService(attendance_repo, profiles_repo),
        leave_service=LeaveService(leaves_repo),
        profile_service=ProfileService(profiles_repo, roles_repo),
        payroll_service=PayrollService(payroll_repo),
        dashboard_service=DashboardService(attendance_repo, leaves_repo, profiles_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        profiles_repo=MySQLProfileRepository(conn),
        roles_repo=MySQLRoleRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        conn=conn,
    )
