from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..common.datetime_utils import Clock, SystemClock
from ..core.constants import (
    DEFAULT_CHECKIN_CUTOFF,
    DEFAULT_NOTIFICATION_LIMIT,
    LATE_MESSAGE,
    LATE_TITLE,
    LEAVE_APPROVED_TITLE,
    LEAVE_REJECTED_TITLE,
    REMINDER_MESSAGE,
    REMINDER_TITLE,
)
from ..core.enums import LeaveStatus, LeaveType
from .model import Notification
from .repository import NotificationRepository


def reminder_dedup_key(title: str, day: date) -> str:
    return f"{title}:{day.isoformat()}"


class NotificationService:
    """Creates notifications for triggering events and serves the user's inbox."""

    def __init__(self, notifications: NotificationRepository, *, clock: Optional[Clock] = None):
        self._notifications = notifications
        self._clock = clock or SystemClock()

    def notify(self, user_id: int, title: str, message: str) -> int:
        return self._notifications.create(
            user_id=int(user_id),
            title=title,
            message=message,
            created_at=self._clock.now(),
        )

    def notify_once(self, user_id: int, title: str, message: str, day: date) -> bool:
        return self._notifications.create_once(
            user_id=int(user_id),
            title=title,
            message=message,
            dedup_key=reminder_dedup_key(title, day),
            created_at=self._clock.now(),
        )

    def notify_late(self, user_id: int, *, cutoff: time = DEFAULT_CHECKIN_CUTOFF) -> int:
        return self.notify(user_id, LATE_TITLE, LATE_MESSAGE.format(cutoff=cutoff.strftime("%H:%M")))

    def notify_leave_decision(
        self,
        user_id: int,
        *,
        leave_type: LeaveType,
        start_date: date,
        status: LeaveStatus,
    ) -> int:
        title = LEAVE_APPROVED_TITLE if status == LeaveStatus.APPROVED else LEAVE_REJECTED_TITLE
        message = f"Your {leave_type.value} leave request starting {start_date.isoformat()} has been {status.value}."
        return self.notify(user_id, title, message)

    def remind_check_in(self, user_id: int, day: date) -> bool:
        return self.notify_once(user_id, REMINDER_TITLE, REMINDER_MESSAGE, day)

    def list_recent(self, user_id: int, *, limit: int = DEFAULT_NOTIFICATION_LIMIT) -> Sequence[Notification]:
        return self._notifications.list_recent(user_id=int(user_id), limit=int(limit))

    def mark_read(self, user_id: int, notification_id: int) -> bool:
        return self._notifications.mark_read(user_id=int(user_id), notification_id=int(notification_id))

    def mark_all_read(self, user_id: int) -> int:
        return self._notifications.mark_all_read(user_id=int(user_id))
