from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role, UserStatus


@dataclass(frozen=True)
class User:
    """Domain entity: employee account.

    Plain data object (no DB access code).
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    job_title: Optional[str] = None
    division: Optional[str] = None
    phone: Optional[str] = None
    join_date: Optional[date] = None
    status: UserStatus = UserStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE
