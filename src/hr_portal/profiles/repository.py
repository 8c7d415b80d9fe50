from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import EmployeeRow, Profile


class ProfileRepository(Protocol):
    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def list_with_roles(self) -> Sequence[EmployeeRow]:
        """All profiles ordered by first name."""

        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError

    def update_contact(self, *, user_id: str, phone: Optional[str], address: Optional[str], updated_at: datetime) -> bool:
        raise NotImplementedError

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
        raise NotImplementedError
