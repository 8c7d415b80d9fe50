from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import leave_days, now_local
from ..common.validators import optional_text, require_date_order, require_present
from ..core.context import RequestContext
from ..core.enums import LeaveStatus
from ..core.exceptions import NotFoundError, ValidationError, WriteError
from .model import LeaveRequest, LeaveRequestRow, LeaveType
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    LeaveStatus.PENDING: "Pending",
    LeaveStatus.APPROVED: "Approved",
    LeaveStatus.REJECTED: "Rejected",
}


class LeaveService:
    """Use cases: submit leave, review leave.

    Approval and its attendance side effect are written in one transaction
    by the repository; this layer only validates and decides.
    """

    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def list_leave_types(self) -> list[LeaveType]:
        return list(self._leaves.list_types())

    def submit(
        self,
        ctx: RequestContext,
        *,
        leave_type_id: Optional[str],
        start_date: Optional[date],
        end_date: Optional[date],
        remarks: Optional[str] = None,
    ) -> str:
        require_present(leave_type_id, "Leave type")
        require_present(start_date, "Start date")
        require_present(end_date, "End date")
        require_date_order(start_date, end_date)

        if not self._leaves.get_type(leave_type_id):
            raise ValidationError("Unknown leave type")

        request_id = self._leaves.create(
            user_id=ctx.user_id,
            leave_type_id=leave_type_id,
            start_date=start_date,
            end_date=end_date,
            remarks=optional_text(remarks, "Remarks"),
        )
        logger.info(
            "leave submitted id=%s user=%s %s..%s",
            request_id, ctx.user_id, start_date.isoformat(), end_date.isoformat(),
        )
        return request_id

    def list_mine(self, ctx: RequestContext) -> list[LeaveRequestRow]:
        return list(self._leaves.list_for_user(ctx.user_id))

    def list_for_review(self, ctx: RequestContext) -> dict:
        ctx.require_admin()
        rows = self._leaves.list_all_with_profiles()
        pending = [r for r in rows if r.request.status == LeaveStatus.PENDING]
        processed = [r for r in rows if r.request.status != LeaveStatus.PENDING]
        return {"pending": pending, "processed": processed}

    def _load_pending(self, request_id: str) -> LeaveRequest:
        req = self._leaves.get(request_id)
        if not req:
            raise NotFoundError("Leave request not found")
        if req.status != LeaveStatus.PENDING:
            raise ValidationError(f"Leave request already {req.status.value}")
        return req

    def approve(
        self,
        ctx: RequestContext,
        *,
        request_id: str,
        comment: Optional[str] = None,
        now: datetime | None = None,
    ) -> int:
        """Approve and mark every covered day as leave. Returns the day count."""
        ctx.require_admin()
        req = self._load_pending(request_id)
        require_date_order(req.start_date, req.end_date)

        days = leave_days(req.start_date, req.end_date)
        ok = self._leaves.approve(
            request_id=req.id,
            reviewer_id=ctx.user_id,
            comment=optional_text(comment, "Comment"),
            reviewed_at=now or now_local(),
            user_id=req.user_id,
            days=days,
        )
        if not ok:
            raise WriteError("Leave request was already reviewed")
        logger.info("leave approved id=%s by=%s days=%d", req.id, ctx.user_id, len(days))
        return len(days)

    def reject(
        self,
        ctx: RequestContext,
        *,
        request_id: str,
        comment: Optional[str] = None,
        now: datetime | None = None,
    ) -> None:
        ctx.require_admin()
        req = self._load_pending(request_id)

        ok = self._leaves.reject(
            request_id=req.id,
            reviewer_id=ctx.user_id,
            comment=optional_text(comment, "Comment"),
            reviewed_at=now or now_local(),
        )
        if not ok:
            raise WriteError("Leave request was already reviewed")
        logger.info("leave rejected id=%s by=%s", req.id, ctx.user_id)

    @staticmethod
    def to_ui(row: LeaveRequestRow) -> dict:
        r = row.request
        out = {
            "id": r.id,
            "user_id": r.user_id,
            "leave_type_id": r.leave_type_id,
            "leave_type": row.leave_type_name or "-",
            "start_date": r.start_date.isoformat(),
            "end_date": r.end_date.isoformat(),
            "days": max(r.day_count, 0),
            "status": r.status.value,
            "status_label": STATUS_LABELS[r.status],
            "remarks": r.remarks,
            "admin_comment": r.admin_comment,
            "reviewed_by": r.reviewed_by,
            "reviewed_at": r.reviewed_at.isoformat() if r.reviewed_at else None,
            "created_at": r.created_at.isoformat() if r.created_at else None,
        }
        if row.first_name is not None or row.employee_id is not None:
            out["employee_name"] = " ".join(p for p in (row.first_name, row.last_name) if p) or "-"
            out["employee_id"] = row.employee_id or "-"
            out["department"] = row.department or "-"
        return out

    @staticmethod
    def type_to_ui(t: LeaveType) -> dict:
        return {
            "id": t.id,
            "name": t.name,
            "days_per_year": t.days_per_year,
            "description": t.description,
        }
