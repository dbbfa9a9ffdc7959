from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import Notification


class NotificationRepository(Protocol):
    def create(self, *, user_id: int, title: str, message: str, created_at: datetime) -> int:
        raise NotImplementedError

    def create_once(self, *, user_id: int, title: str, message: str, dedup_key: str, created_at: datetime) -> bool:
        """Insert unless (user_id, dedup_key) already exists. True when a row was inserted."""

        raise NotImplementedError

    def list_recent(self, *, user_id: int, limit: int) -> Sequence[Notification]:
        raise NotImplementedError

    def mark_read(self, *, user_id: int, notification_id: int) -> bool:
        raise NotImplementedError

    def mark_all_read(self, *, user_id: int) -> int:
        raise NotImplementedError
