from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Notification
from .repository import NotificationRepository


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, title: str, message: str, created_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(user_id, title, message, created_at)
                VALUES(%s,%s,%s,%s)
                """,
                (int(user_id), title, message, created_at),
            )
            return int(cur.lastrowid)

    def create_once(self, *, user_id: int, title: str, message: str, dedup_key: str, created_at: datetime) -> bool:
        # INSERT IGNORE turns the uq_notification_dedup violation into a no-op
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO notifications(user_id, title, message, dedup_key, created_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), title, message, dedup_key, created_at),
            )
            return cur.rowcount > 0

    def list_recent(self, *, user_id: int, limit: int) -> Sequence[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT notification_id, user_id, title, message, is_read, created_at, dedup_key
                FROM notifications
                WHERE user_id=%s
                ORDER BY created_at DESC, notification_id DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [
                Notification(
                    notification_id=int(r["notification_id"]),
                    user_id=int(r["user_id"]),
                    title=r["title"],
                    message=r["message"],
                    is_read=bool(r["is_read"]),
                    created_at=r["created_at"],
                    dedup_key=r.get("dedup_key"),
                )
                for r in fetchall(cur)
            ]

    def mark_read(self, *, user_id: int, notification_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notifications SET is_read=1 WHERE notification_id=%s AND user_id=%s",
                (int(notification_id), int(user_id)),
            )
            return cur.rowcount > 0

    def mark_all_read(self, *, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE notifications SET is_read=1 WHERE user_id=%s AND is_read=0", (int(user_id),))
            return int(cur.rowcount)
