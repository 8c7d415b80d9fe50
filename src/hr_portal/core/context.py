from __future__ import annotations

from dataclasses import dataclass

from .enums import Role
from .exceptions import AuthorizationError


@dataclass(frozen=True)
class RequestContext:
    """Who is acting. Passed explicitly into every service call."""

    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def require_admin(self) -> None:
        if not self.is_admin:
            raise AuthorizationError("Admin access required")
