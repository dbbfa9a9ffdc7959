from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.validators import optional_text, require_enum, require_non_empty
from ..core.enums import LeaveStatus, LeaveType, Role
from ..core.exceptions import AuthorizationError, InvalidInput, RecordNotFound
from ..notifications.service import NotificationService
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

DECISIONS = {LeaveStatus.APPROVED, LeaveStatus.REJECTED}


class LeaveService:
    """Leave request workflow: submit, list, approve/reject once."""

    def __init__(self, leaves: LeaveRepository, notifications: NotificationService):
        self._leaves = leaves
        self._notifications = notifications

    def submit(
        self,
        *,
        user_id: int,
        leave_type: str,
        reason: str,
        start_date: Optional[date],
        end_date: Optional[date],
        proof_file: Optional[str] = None,
    ) -> int:
        kind = require_enum(leave_type, LeaveType, "Leave type")
        reason = require_non_empty(reason, "Reason")
        if start_date is None or end_date is None:
            raise InvalidInput("Start date and end date are required")
        if end_date < start_date:
            raise InvalidInput("End date must be on or after start date")

        return self._leaves.create(
            user_id=int(user_id),
            leave_type=kind,
            reason=reason,
            start_date=start_date,
            end_date=end_date,
            proof_file=optional_text(proof_file),
        )

    def list_for_user(self, user_id: int) -> Sequence[LeaveRequest]:
        return self._leaves.list_requests(user_id=int(user_id))

    def list_all(self, *, status: Optional[LeaveStatus] = None, limit: int = 500) -> Sequence[LeaveRequest]:
        return self._leaves.list_requests(status=status, limit=int(limit))

    def decide(self, *, current_role: Role, approver_id: int, request_id: int, status: str) -> LeaveStatus:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        decision = require_enum(status, LeaveStatus, "status")
        if decision not in DECISIONS:
            raise InvalidInput("status must be one of: approved, rejected")

        leave = self._leaves.get(int(request_id))
        if not leave:
            raise RecordNotFound("Leave request not found")

        if not self._leaves.decide(request_id=leave.request_id, status=decision, approved_by=int(approver_id)):
            raise InvalidInput("Leave request has already been decided")

        try:
            self._notifications.notify_leave_decision(
                leave.user_id,
                leave_type=leave.leave_type,
                start_date=leave.start_date,
                status=decision,
            )
        except Exception:
            logger.exception("failed to notify employee %s about leave %s", leave.user_id, leave.request_id)

        return decision

    def count_approved_starting_between(self, *, user_id: int, start_date: date, end_date: date) -> int:
        return self._leaves.count_approved_starting_between(
            user_id=int(user_id),
            start_date=start_date,
            end_date=end_date,
        )

    def count_by_status(self, status: LeaveStatus) -> int:
        return self._leaves.count_by_status(status)
