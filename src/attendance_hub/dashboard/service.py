from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import Clock, SystemClock, parse_month
from ..core.constants import HOURS_PRECISION
from ..core.enums import AttendanceStatus, LeaveStatus
from ..leaves.service import LeaveService
from ..users.service import AuthService
from .model import CompanySnapshot, MonthlySummary
from .reminder import ReminderPolicy

logger = logging.getLogger(__name__)


class DashboardService:
    """Read-only statistics over the attendance ledger and leave requests.

    The only write is the reminder side effect of user_monthly_summary.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        leaves: LeaveService,
        users: AuthService,
        reminders: ReminderPolicy,
        *,
        clock: Optional[Clock] = None,
    ):
        self._attendance = attendance
        self._leaves = leaves
        self._users = users
        self._reminders = reminders
        self._clock = clock or SystemClock()

    def user_monthly_summary(self, employee_id: int, month: Optional[str] = None) -> MonthlySummary:
        now = self._clock.now()
        start, end = parse_month(month or now.strftime("%Y-%m"))

        try:
            self._reminders.evaluate(int(employee_id), now=now)
        except Exception:
            logger.exception("reminder evaluation failed for employee %s", employee_id)

        totals = self._attendance.monthly_totals(user_id=int(employee_id), start_date=start, end_date=end)
        leaves = self._leaves.count_approved_starting_between(
            user_id=int(employee_id),
            start_date=start,
            end_date=end,
        )
        return MonthlySummary(
            present=totals.present,
            late=totals.late,
            hours=round(totals.hours, HOURS_PRECISION),
            leaves=leaves,
        )

    def company_daily_snapshot(self, day: Optional[date] = None) -> CompanySnapshot:
        day = day or self._clock.now().date()
        return CompanySnapshot(
            total_employees=self._users.count_employees(),
            present_today=self._attendance.count_for_date(day),
            late_today=self._attendance.count_for_date(day, status=AttendanceStatus.LATE),
            pending_leaves=self._leaves.count_by_status(LeaveStatus.PENDING),
        )
