from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    leave_type: LeaveType
    reason: str
    start_date: date
    end_date: date
    status: LeaveStatus
    created_at: datetime
    proof_file: Optional[str] = None
    approved_by: Optional[int] = None
    employee_name: Optional[str] = None
