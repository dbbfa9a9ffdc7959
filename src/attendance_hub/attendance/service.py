from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import Clock, SystemClock, hours_between
from ..common.validators import require_enum
from ..core.constants import DEFAULT_ADMIN_LIST_LIMIT, DEFAULT_HISTORY_LIMIT, HOURS_PRECISION, MAX_PHOTO_LENGTH
from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedOut, InvalidInput, NotCheckedIn
from ..notifications.service import NotificationService
from .factory import CheckInStatusFactory
from .model import AttendanceRecord, Location
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

# statuses a client may propose at check-in
REPORTABLE_STATUSES = {AttendanceStatus.PRESENT, AttendanceStatus.LATE}


class AttendanceService:
    """Attendance ledger: one record per employee per day, checked in then checked out."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        notifications: NotificationService,
        *,
        clock: Optional[Clock] = None,
        status_factory: Optional[CheckInStatusFactory] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self._attendance = attendance
        self._notifications = notifications
        self._clock = clock or SystemClock()
        self._factory = status_factory or CheckInStatusFactory()
        self._history_limit = int(history_limit)

    @staticmethod
    def _parse_reported(value) -> Optional[AttendanceStatus]:
        if value is None or value == "":
            return None
        if isinstance(value, AttendanceStatus):
            status = value
        else:
            status = require_enum(str(value), AttendanceStatus, "status")
        if status not in REPORTABLE_STATUSES:
            raise InvalidInput("status must be one of: present, late")
        return status

    @staticmethod
    def _parse_location(value) -> Optional[Location]:
        try:
            return Location.from_value(value)
        except (TypeError, ValueError):
            raise InvalidInput("location must be a latitude/longitude pair")

    @staticmethod
    def _parse_photo(value) -> Optional[str]:
        if value is None or value == "":
            return None
        if not isinstance(value, str):
            raise InvalidInput("photo must be a string (reference or data URL)")
        if len(value) > MAX_PHOTO_LENGTH:
            raise InvalidInput("photo is too large")
        return value

    def check_in(
        self,
        employee_id: int,
        *,
        work_date: Optional[date] = None,
        location=None,
        photo: Optional[str] = None,
        reported_status=None,
        now: Optional[datetime] = None,
    ) -> None:
        now = now or self._clock.now()
        work_date = work_date or now.date()
        reported = self._parse_reported(reported_status)
        loc = self._parse_location(location)
        photo = self._parse_photo(photo)

        strategy = self._factory.for_checkin(now=now, reported=reported)
        decision = strategy.decide_checkin(now=now, cutoff=self._factory.cutoff)
        if reported is not None and reported != decision.status:
            logger.info(
                "check-in status for employee %s: client reported %s, recorded %s",
                employee_id,
                reported.value,
                decision.status.value,
            )

        # raises AlreadyCheckedIn on (employee, date) conflict
        self._attendance.create_checkin(
            user_id=int(employee_id),
            work_date=work_date,
            check_in=now.time().replace(microsecond=0),
            status=decision.status,
            location=loc,
            photo=photo,
        )

        if decision.status == AttendanceStatus.LATE:
            logger.info("employee %s checked in late on %s (%s)", employee_id, work_date, decision.note)
            self._notify_late(int(employee_id))

    def _notify_late(self, employee_id: int) -> None:
        try:
            self._notifications.notify_late(employee_id, cutoff=self._factory.cutoff)
        except Exception:
            # the check-in is already committed
            logger.exception("failed to create lateness notification for employee %s", employee_id)

    def check_out(
        self,
        employee_id: int,
        *,
        work_date: Optional[date] = None,
        location=None,
        photo: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> None:
        now = now or self._clock.now()
        work_date = work_date or now.date()
        loc = self._parse_location(location)
        photo = self._parse_photo(photo)

        record = self._attendance.get_for_user_and_date(int(employee_id), work_date)
        if not record or record.check_in is None:
            raise NotCheckedIn("Not checked in today")
        if record.is_checked_out:
            raise AlreadyCheckedOut("Already checked out today")

        check_out = now.time().replace(microsecond=0)
        total_hours = round(hours_between(work_date, record.check_in, check_out), HOURS_PRECISION)
        if total_hours < 0:
            logger.warning(
                "negative worked hours for employee %s on %s (in=%s out=%s): %.2f",
                employee_id,
                work_date,
                record.check_in,
                check_out,
                total_hours,
            )

        updated = self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out=check_out,
            total_hours=total_hours,
            location=loc,
            photo=photo,
        )
        if not updated:
            # a concurrent checkout won
            raise AlreadyCheckedOut("Already checked out today")

    def get_today(self, employee_id: int, work_date: Optional[date] = None) -> Optional[AttendanceRecord]:
        work_date = work_date or self._clock.now().date()
        return self._attendance.get_for_user_and_date(int(employee_id), work_date)

    def get_history(self, employee_id: int, *, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        limit = self._history_limit if limit is None else int(limit)
        if limit <= 0:
            raise InvalidInput("limit must be positive")
        return self._attendance.get_recent_for_user(int(employee_id), limit)

    def list_all(self, *, limit: int = DEFAULT_ADMIN_LIST_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all(limit=int(limit))
