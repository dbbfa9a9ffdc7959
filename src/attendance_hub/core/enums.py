from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization checks."""

    ADMIN = "admin"
    HR = "hr"
    STAFF = "staff"


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the database."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    LEAVE = "leave"


class LeaveType(str, Enum):
    SICK = "sick"
    VACATION = "vacation"
    OTHER = "other"


class LeaveStatus(str, Enum):
    """Leave approval workflow: PENDING moves once to APPROVED or REJECTED."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
