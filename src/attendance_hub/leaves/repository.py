from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        reason: str,
        start_date: date,
        end_date: date,
        proof_file: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        """Newest first, joined with the employee name."""

        raise NotImplementedError

    def decide(self, *, request_id: int, status: LeaveStatus, approved_by: int) -> bool:
        """Conditional on the request still being PENDING."""

        raise NotImplementedError

    def count_approved_starting_between(self, *, user_id: int, start_date: date, end_date: date) -> int:
        """Approved requests with start_date <= request.start_date < end_date."""

        raise NotImplementedError

    def count_by_status(self, status: LeaveStatus) -> int:
        raise NotImplementedError
