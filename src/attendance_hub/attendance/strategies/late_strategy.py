from __future__ import annotations

from datetime import datetime, time

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy, StatusDecision


class LateStrategy(CheckInStrategy):
    """Check-in after the cutoff."""

    def decide_checkin(self, *, now: datetime, cutoff: time) -> StatusDecision:
        minutes = int((now - datetime.combine(now.date(), cutoff)).total_seconds() // 60)
        return StatusDecision(status=AttendanceStatus.LATE, note=f"late by {minutes} min")
