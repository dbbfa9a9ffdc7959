from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedIn
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetch_count,
    fetchall,
    fetchone,
    from_json_text,
    is_duplicate_key,
    normalize_mysql_time,
    to_json_text,
)
from .model import AttendanceRecord, Location, MonthlyTotals
from .repository import AttendanceRepository

_COLUMNS = """
    a.attendance_id, a.user_id, a.work_date, a.check_in, a.check_out, a.status,
    a.location_in, a.location_out, a.photo_in, a.photo_out, a.total_hours
"""


def _location(value: Optional[str]) -> Optional[Location]:
    return Location.from_value(from_json_text(value))


def _to_record(r: dict) -> AttendanceRecord:
    total_hours = r.get("total_hours")
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in=normalize_mysql_time(r.get("check_in")),
        check_out=normalize_mysql_time(r.get("check_out")),
        status=AttendanceStatus(r["status"]),
        location_in=_location(r.get("location_in")),
        location_out=_location(r.get("location_out")),
        photo_in=r.get("photo_in"),
        photo_out=r.get("photo_out"),
        total_hours=float(total_hours) if total_hours is not None else None,
        employee_name=r.get("employee_name"),
        division=r.get("division"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records a
                WHERE a.user_id=%s AND a.work_date=%s
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, u.name AS employee_name
                FROM attendance_records a
                JOIN users u ON u.user_id = a.user_id
                WHERE a.user_id=%s
                ORDER BY a.work_date DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_all(self, *, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, u.name AS employee_name, u.division
                FROM attendance_records a
                JOIN users u ON u.user_id = a.user_id
                ORDER BY a.work_date DESC, a.check_in DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_to_record(r) for r in fetchall(cur)]

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(user_id, work_date, check_in, status, location_in, photo_in)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(user_id),
                        work_date,
                        check_in,
                        status.value,
                        to_json_text(location.as_dict() if location else None),
                        photo,
                    ),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise AlreadyCheckedIn("Already checked in today") from e
            raise

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out: time,
        total_hours: float,
        location: Optional[Location] = None,
        photo: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out=%s, location_out=%s, photo_out=%s, total_hours=%s
                WHERE attendance_id=%s AND check_in IS NOT NULL AND check_out IS NULL
                """,
                (
                    check_out,
                    to_json_text(location.as_dict() if location else None),
                    photo,
                    total_hours,
                    int(attendance_id),
                ),
            )
            return cur.rowcount > 0

    def monthly_totals(self, *, user_id: int, start_date: date, end_date: date) -> MonthlyTotals:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    COUNT(*) AS present,
                    COALESCE(SUM(CASE WHEN status=%s THEN 1 ELSE 0 END), 0) AS late,
                    COALESCE(SUM(total_hours), 0) AS hours
                FROM attendance_records
                WHERE user_id=%s AND work_date >= %s AND work_date < %s
                """,
                (AttendanceStatus.LATE.value, int(user_id), start_date, end_date),
            )
            r = fetchone(cur) or {}
            return MonthlyTotals(
                present=int(r.get("present") or 0),
                late=int(r.get("late") or 0),
                hours=float(r.get("hours") or 0),
            )

    def count_for_date(self, work_date: date, *, status: Optional[AttendanceStatus] = None) -> int:
        clauses = ["work_date=%s"]
        params: list[object] = [work_date]
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT COUNT(*) AS count FROM attendance_records WHERE {' AND '.join(clauses)}",
                tuple(params),
            )
            return fetch_count(cur)
