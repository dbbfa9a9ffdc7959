from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from attendance_hub.attendance.model import AttendanceRecord, Location, MonthlyTotals
from attendance_hub.container import AttendanceRules, build_services
from attendance_hub.core.enums import AttendanceStatus, LeaveStatus, LeaveType, Role, UserStatus
from attendance_hub.core.exceptions import AlreadyCheckedIn
from attendance_hub.leaves.model import LeaveRequest
from attendance_hub.notifications.model import Notification
from attendance_hub.users.model import User


class FixedClock:
    def __init__(self, current: datetime):
        self.current = current

    def now(self) -> datetime:
        return self.current


class InMemoryUsers:
    def __init__(self, users: Optional[list[User]] = None):
        self.users_by_id = {u.user_id: u for u in users or []}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users_by_id.get(user_id)

    def count_all(self) -> int:
        return len(self.users_by_id)

    def list_active_ids(self) -> list[int]:
        return sorted(u.user_id for u in self.users_by_id.values() if u.is_active)


class InMemoryAttendance:
    def __init__(self):
        self._by_user_date: dict[tuple[int, date], AttendanceRecord] = {}
        self._next_id = 1

    def add(self, record: AttendanceRecord) -> None:
        self._by_user_date[(record.user_id, record.work_date)] = record

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_user_date.get((user_id, work_date))

    def get_recent_for_user(self, user_id: int, limit: int) -> list[AttendanceRecord]:
        rows = [r for r in self._by_user_date.values() if r.user_id == user_id]
        return sorted(rows, key=lambda r: r.work_date, reverse=True)[:limit]

    def list_all(self, *, limit: int) -> list[AttendanceRecord]:
        rows = sorted(self._by_user_date.values(), key=lambda r: (r.work_date, r.user_id), reverse=True)
        return rows[:limit]

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
        key = (user_id, work_date)
        if key in self._by_user_date:
            raise AlreadyCheckedIn("Already checked in today")

        attendance_id = self._next_id
        self._next_id += 1
        self._by_user_date[key] = AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            work_date=work_date,
            check_in=check_in,
            check_out=None,
            status=status,
            location_in=location,
            photo_in=photo,
        )
        return attendance_id

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out: time,
        total_hours: float,
        location: Optional[Location] = None,
        photo: Optional[str] = None,
    ) -> bool:
        for key, r in self._by_user_date.items():
            if r.attendance_id == attendance_id:
                if r.check_in is None or r.check_out is not None:
                    return False
                self._by_user_date[key] = replace(
                    r,
                    check_out=check_out,
                    total_hours=total_hours,
                    location_out=location,
                    photo_out=photo,
                )
                return True
        return False

    def monthly_totals(self, *, user_id: int, start_date: date, end_date: date) -> MonthlyTotals:
        rows = [
            r
            for r in self._by_user_date.values()
            if r.user_id == user_id and start_date <= r.work_date < end_date
        ]
        return MonthlyTotals(
            present=len(rows),
            late=sum(1 for r in rows if r.status == AttendanceStatus.LATE),
            hours=sum(r.total_hours or 0 for r in rows),
        )

    def count_for_date(self, work_date: date, *, status: Optional[AttendanceStatus] = None) -> int:
        return sum(
            1
            for r in self._by_user_date.values()
            if r.work_date == work_date and (status is None or r.status == status)
        )


class InMemoryLeaves:
    def __init__(self):
        self.requests: dict[int, LeaveRequest] = {}
        self._next_id = 1

    def create(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        reason: str,
        start_date: date,
        end_date: date,
        proof_file: Optional[str] = None,
        status: LeaveStatus = LeaveStatus.PENDING,
    ) -> int:
        request_id = self._next_id
        self._next_id += 1
        self.requests[request_id] = LeaveRequest(
            request_id=request_id,
            user_id=user_id,
            leave_type=leave_type,
            reason=reason,
            start_date=start_date,
            end_date=end_date,
            status=status,
            created_at=datetime(2025, 1, 1, 8, 0),
            proof_file=proof_file,
        )
        return request_id

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        return self.requests.get(request_id)

    def list_requests(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[int] = None,
        limit: int = 200,
    ) -> list[LeaveRequest]:
        rows = [
            r
            for r in self.requests.values()
            if (status is None or r.status == status) and (user_id is None or r.user_id == user_id)
        ]
        return sorted(rows, key=lambda r: r.request_id, reverse=True)[:limit]

    def decide(self, *, request_id: int, status: LeaveStatus, approved_by: int) -> bool:
        r = self.requests.get(request_id)
        if not r or r.status != LeaveStatus.PENDING:
            return False
        self.requests[request_id] = replace(r, status=status, approved_by=approved_by)
        return True

    def count_approved_starting_between(self, *, user_id: int, start_date: date, end_date: date) -> int:
        return sum(
            1
            for r in self.requests.values()
            if r.user_id == user_id and r.status == LeaveStatus.APPROVED and start_date <= r.start_date < end_date
        )

    def count_by_status(self, status: LeaveStatus) -> int:
        return sum(1 for r in self.requests.values() if r.status == status)


class InMemoryNotifications:
    def __init__(self):
        self.items: list[Notification] = []

    def _append(self, *, user_id, title, message, created_at, dedup_key=None) -> int:
        notification_id = len(self.items) + 1
        self.items.append(
            Notification(
                notification_id=notification_id,
                user_id=user_id,
                title=title,
                message=message,
                is_read=False,
                created_at=created_at,
                dedup_key=dedup_key,
            )
        )
        return notification_id

    def create(self, *, user_id: int, title: str, message: str, created_at: datetime) -> int:
        return self._append(user_id=user_id, title=title, message=message, created_at=created_at)

    def create_once(self, *, user_id: int, title: str, message: str, dedup_key: str, created_at: datetime) -> bool:
        if any(n.user_id == user_id and n.dedup_key == dedup_key for n in self.items):
            return False
        self._append(user_id=user_id, title=title, message=message, created_at=created_at, dedup_key=dedup_key)
        return True

    def list_recent(self, *, user_id: int, limit: int) -> list[Notification]:
        rows = [n for n in self.items if n.user_id == user_id]
        return sorted(rows, key=lambda n: (n.created_at, n.notification_id), reverse=True)[:limit]

    def mark_read(self, *, user_id: int, notification_id: int) -> bool:
        for i, n in enumerate(self.items):
            if n.notification_id == notification_id and n.user_id == user_id:
                self.items[i] = replace(n, is_read=True)
                return True
        return False

    def mark_all_read(self, *, user_id: int) -> int:
        count = 0
        for i, n in enumerate(self.items):
            if n.user_id == user_id and not n.is_read:
                self.items[i] = replace(n, is_read=True)
                count += 1
        return count

    def for_user(self, user_id: int) -> list[Notification]:
        return [n for n in self.items if n.user_id == user_id]


class BrokenNotifications(InMemoryNotifications):
    def create(self, **kwargs) -> int:
        raise RuntimeError("notification store unavailable")


def make_user(user_id: int, *, role: Role = Role.STAFF, password: str = "secret", **kwargs) -> User:
    return User(
        user_id=user_id,
        name=kwargs.pop("name", f"Employee {user_id}"),
        email=kwargs.pop("email", f"emp{user_id}@example.com"),
        password_hash=generate_password_hash(password),
        role=role,
        division=kwargs.pop("division", "Engineering"),
        status=kwargs.pop("status", UserStatus.ACTIVE),
        **kwargs,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 6, 8, 0, 0)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers(
        [
            make_user(1, role=Role.ADMIN, password="admin123", name="Admin"),
            make_user(2, name="Alice"),
            make_user(3, name="Bob"),
            make_user(4, name="Carol", status=UserStatus.INACTIVE),
        ]
    )


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def leaves_repo() -> InMemoryLeaves:
    return InMemoryLeaves()


@pytest.fixture
def notifications_repo() -> InMemoryNotifications:
    return InMemoryNotifications()


@pytest.fixture
def container(users, attendance_repo, leaves_repo, notifications_repo, clock):
    return build_services(
        users_repo=users,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        notifications_repo=notifications_repo,
        rules=AttendanceRules(),
        clock=clock,
    )
