from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, Location, MonthlyTotals


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self, *, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in: time,
        status: AttendanceStatus,
        location: Optional[Location] = None,
        photo: Optional[str] = None,
    ) -> int:
        """Atomic insert; raises AlreadyCheckedIn when (user_id, work_date) exists."""

        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out: time,
        total_hours: float,
        location: Optional[Location] = None,
        photo: Optional[str] = None,
    ) -> bool:
        """Conditional on check_out being unset; False when nothing was updated."""

        raise NotImplementedError

    def monthly_totals(self, *, user_id: int, start_date: date, end_date: date) -> MonthlyTotals:
        """Totals for start_date <= work_date < end_date."""

        raise NotImplementedError

    def count_for_date(self, work_date: date, *, status: Optional[AttendanceStatus] = None) -> int:
        raise NotImplementedError
