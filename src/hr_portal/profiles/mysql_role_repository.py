from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .role_repository import RoleRepository


class MySQLRoleRepository(RoleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_role(self, user_id: str) -> Optional[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT role FROM user_roles WHERE user_id=%s", (user_id,))
            roles = {Role(r["role"]) for r in fetchall(cur)}
        if not roles:
            return None
        # A user holding both roles acts as admin.
        return Role.ADMIN if Role.ADMIN in roles else Role.EMPLOYEE
