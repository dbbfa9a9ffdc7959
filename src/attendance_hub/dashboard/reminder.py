from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Iterable, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import Clock, SystemClock
from ..core.constants import DEFAULT_REMINDER_AFTER
from ..notifications.service import NotificationService

logger = logging.getLogger(__name__)


class ReminderPolicy:
    """Decides when an employee gets the daily "check in" reminder.

    Callable from the dashboard read path and from the send-reminders CLI
    command. At most one reminder per employee per day.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        notifications: NotificationService,
        *,
        clock: Optional[Clock] = None,
        remind_after: time = DEFAULT_REMINDER_AFTER,
    ):
        self._attendance = attendance
        self._notifications = notifications
        self._clock = clock or SystemClock()
        self._remind_after = remind_after

    def is_due(self, now: datetime) -> bool:
        return now.time() >= self._remind_after

    def evaluate(self, employee_id: int, *, now: Optional[datetime] = None) -> bool:
        """Create today's reminder if due and missing. True when a notification was created."""
        now = now or self._clock.now()
        if not self.is_due(now):
            return False

        today = now.date()
        if self._attendance.get_for_user_and_date(int(employee_id), today):
            return False

        created = self._notifications.remind_check_in(int(employee_id), today)
        if created:
            logger.info("check-in reminder created for employee %s on %s", employee_id, today)
        return created

    def sweep(self, employee_ids: Iterable[int], *, now: Optional[datetime] = None) -> int:
        now = now or self._clock.now()
        return sum(1 for employee_id in employee_ids if self.evaluate(employee_id, now=now))
