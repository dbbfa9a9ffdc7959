from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash

from ..core.enums import Role
from ..common.validators import as_text
from ..core.exceptions import AuthenticationError, RecordNotFound
from .model import User
from .repository import UserRepository

EMPLOYEE_CODE_PREFIX = "EMP-"


@dataclass(frozen=True)
class SessionUser:
    """Subject claims stored into the Flask session after login."""

    user_id: int
    name: str
    email: str
    role: Role


def parse_employee_code(value) -> Optional[int]:
    """'EMP-0001' or '1' -> 1; anything else -> None."""
    code = as_text(value).upper()
    if code.startswith(EMPLOYEE_CODE_PREFIX):
        code = code[len(EMPLOYEE_CODE_PREFIX):]
    if not code.isdecimal() or int(code) <= 0:
        return None
    return int(code)


def format_employee_code(user_id: int) -> str:
    return f"{EMPLOYEE_CODE_PREFIX}{int(user_id):04d}"


class AuthService:
    """Identity provider: verify credentials -> subject claims."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, employee_code: str, password: str) -> SessionUser:
        user_id = parse_employee_code(employee_code)
        if user_id is None:
            raise AuthenticationError("Invalid employee ID")

        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid employee ID or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except Exception:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid employee ID or password")

        return SessionUser(user_id=user.user_id, name=user.name, email=user.email, role=user.role)

    def get_profile(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise RecordNotFound("Employee not found")
        return user

    def count_employees(self) -> int:
        return self._users.count_all()

    def list_active_ids(self) -> Sequence[int]:
        return self._users.list_active_ids()
