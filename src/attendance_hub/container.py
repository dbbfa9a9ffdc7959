from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import CheckInStatusFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, SystemClock, parse_hhmm
from .core.constants import DEFAULT_HISTORY_LIMIT
from .dashboard.reminder import ReminderPolicy
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.service import NotificationService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class AttendanceRules:
    checkin_cutoff: str = "09:00"
    reminder_after: str = "08:30"
    trust_client_status: bool = False
    history_limit: int = DEFAULT_HISTORY_LIMIT

    @classmethod
    def from_settings(cls, settings) -> "AttendanceRules":
        return cls(
            checkin_cutoff=str(getattr(settings, "CHECKIN_CUTOFF", cls.checkin_cutoff)),
            reminder_after=str(getattr(settings, "REMINDER_AFTER", cls.reminder_after)),
            trust_client_status=bool(getattr(settings, "TRUST_CLIENT_STATUS", cls.trust_client_status)),
            history_limit=int(getattr(settings, "HISTORY_LIMIT", cls.history_limit)),
        )


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    auth_service: AuthService
    notification_service: NotificationService
    attendance_service: AttendanceService
    leave_service: LeaveService
    reminder_policy: ReminderPolicy
    dashboard_service: DashboardService


def build_services(
    *,
    users_repo,
    attendance_repo,
    leaves_repo,
    notifications_repo,
    rules: AttendanceRules = AttendanceRules(),
    clock: Optional[Clock] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over the given repositories (MySQL in production, fakes in tests)."""

    clock = clock or SystemClock()

    auth_service = AuthService(users_repo)
    notification_service = NotificationService(notifications_repo, clock=clock)
    attendance_service = AttendanceService(
        attendance_repo,
        notification_service,
        clock=clock,
        status_factory=CheckInStatusFactory(
            cutoff=parse_hhmm(rules.checkin_cutoff),
            trust_client_status=rules.trust_client_status,
        ),
        history_limit=rules.history_limit,
    )
    leave_service = LeaveService(leaves_repo, notification_service)
    reminder_policy = ReminderPolicy(
        attendance_repo,
        notification_service,
        clock=clock,
        remind_after=parse_hhmm(rules.reminder_after),
    )
    dashboard_service = DashboardService(
        attendance_repo,
        leave_service,
        auth_service,
        reminder_policy,
        clock=clock,
    )

    return Container(
        conn=conn,
        auth_service=auth_service,
        notification_service=notification_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        reminder_policy=reminder_policy,
        dashboard_service=dashboard_service,
    )


def build_container(*, db_config: dict, rules: AttendanceRules = AttendanceRules()) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return build_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        rules=rules,
        conn=conn,
    )
