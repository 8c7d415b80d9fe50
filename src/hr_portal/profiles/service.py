from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import optional_text
from ..core.context import RequestContext
from ..core.enums import Role
from ..core.exceptions import NotFoundError, WriteError
from .model import EmployeeRow, Profile
from .repository import ProfileRepository
from .role_repository import RoleRepository

logger = logging.getLogger(__name__)


class ProfileService:
    """Use cases: own profile, employee directory, role lookup."""

    def __init__(self, profiles: ProfileRepository, roles: RoleRepository):
        self._profiles = profiles
        self._roles = roles

    def role_for(self, user_id: str) -> Role:
        return self._roles.get_role(user_id) or Role.EMPLOYEE

    def context_for(self, user_id: str) -> RequestContext:
        return RequestContext(user_id=user_id, role=self.role_for(user_id))

    def get_mine(self, ctx: RequestContext) -> Profile:
        profile = self._profiles.get_by_user_id(ctx.user_id)
        if not profile:
            raise NotFoundError("Profile not found")
        return profile

    def update_contact(
        self,
        ctx: RequestContext,
        *,
        phone: Optional[str],
        address: Optional[str],
        now: datetime | None = None,
    ) -> None:
        ok = self._profiles.update_contact(
            user_id=ctx.user_id,
            phone=optional_text(phone, "Phone"),
            address=optional_text(address, "Address"),
            updated_at=now or now_local(),
        )
        if not ok:
            raise WriteError("Profile update failed")
        logger.info("profile contact updated user=%s", ctx.user_id)

    def list_employees(self, ctx: RequestContext, *, search: str = "") -> list[EmployeeRow]:
        ctx.require_admin()
        rows = list(self._profiles.list_with_roles())
        term = (search or "").strip().lower()
        if not term:
            return rows

        def _matches(row: EmployeeRow) -> bool:
            p = row.profile
            return any(term in (v or "").lower() for v in (p.first_name, p.last_name, p.email, p.employee_id))

        return [r for r in rows if _matches(r)]

    def admin_update(
        self,
        ctx: RequestContext,
        *,
        profile_id: str,
        department: Optional[str],
        position: Optional[str],
        phone: Optional[str],
        address: Optional[str],
        now: datetime | None = None,
    ) -> None:
        ctx.require_admin()
        ok = self._profiles.admin_update(
            profile_id=profile_id,
            department=optional_text(department, "Department"),
            position=optional_text(position, "Position"),
            phone=optional_text(phone, "Phone"),
            address=optional_text(address, "Address"),
            updated_at=now or now_local(),
        )
        if not ok:
            raise WriteError("Employee update failed")
        logger.info("profile updated by admin=%s profile=%s", ctx.user_id, profile_id)

    @staticmethod
    def to_ui(p: Profile) -> dict:
        return {
            "id": p.id,
            "user_id": p.user_id,
            "employee_id": p.employee_id,
            "first_name": p.first_name,
            "last_name": p.last_name,
            "full_name": p.full_name,
            "email": p.email,
            "phone": p.phone,
            "address": p.address,
            "department": p.department,
            "position": p.position,
            "hire_date": p.hire_date.isoformat() if p.hire_date else None,
            "profile_picture": p.profile_picture,
        }

    def employee_to_ui(self, row: EmployeeRow) -> dict:
        out = self.to_ui(row.profile)
        out["role"] = row.role.value
        return out
