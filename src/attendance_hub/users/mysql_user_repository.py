from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role, UserStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, fetchone
from .model import User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, name, email, password_hash, role, job_title, division, phone, join_date, status
                FROM users
                WHERE user_id=%s
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return User(
                user_id=int(row["user_id"]),
                name=row["name"],
                email=row["email"],
                password_hash=row["password_hash"],
                role=Role(row["role"]),
                job_title=row.get("job_title"),
                division=row.get("division"),
                phone=row.get("phone"),
                join_date=row.get("join_date"),
                status=UserStatus(row.get("status") or UserStatus.ACTIVE.value),
            )

    def count_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS count FROM users")
            return fetch_count(cur)

    def list_active_ids(self) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id FROM users WHERE status=%s ORDER BY user_id",
                (UserStatus.ACTIVE.value,),
            )
            return [int(r["user_id"]) for r in fetchall(cur)]
