from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        leave_type=LeaveType(r["leave_type"]),
        reason=r["reason"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        status=LeaveStatus(r["status"]),
        created_at=r["created_at"],
        proof_file=r.get("proof_file"),
        approved_by=r.get("approved_by"),
        employee_name=r.get("employee_name"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, leave_type, reason, proof_file, start_date, end_date, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    leave_type.value,
                    reason,
                    proof_file,
                    start_date,
                    end_date,
                    LeaveStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, user_id, leave_type, reason, proof_file,
                       start_date, end_date, status, approved_by, created_at
                FROM leave_requests
                WHERE request_id=%s
                """,
                (int(request_id),),
            )
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_requests(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("r.status=%s")
            params.append(status.value)
        if user_id is not None:
            clauses.append("r.user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT r.request_id, r.user_id, u.name AS employee_name,
                       r.leave_type, r.reason, r.proof_file,
                       r.start_date, r.end_date, r.status, r.approved_by, r.created_at
                FROM leave_requests r
                JOIN users u ON u.user_id = r.user_id
                WHERE {where}
                ORDER BY r.created_at DESC, r.request_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def decide(self, *, request_id: int, status: LeaveStatus, approved_by: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approved_by=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, int(approved_by), int(request_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def count_approved_starting_between(self, *, user_id: int, start_date: date, end_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS count
                FROM leave_requests
                WHERE user_id=%s AND status=%s AND start_date >= %s AND start_date < %s
                """,
                (int(user_id), LeaveStatus.APPROVED.value, start_date, end_date),
            )
            return fetch_count(cur)

    def count_by_status(self, status: LeaveStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS count FROM leave_requests WHERE status=%s", (status.value,))
            return fetch_count(cur)
