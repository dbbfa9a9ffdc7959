from __future__ import annotations

from datetime import datetime, time

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy, StatusDecision


class ReportedStatusStrategy(CheckInStrategy):
    """Persist the status computed by the client (TRUST_CLIENT_STATUS mode)."""

    def __init__(self, reported: AttendanceStatus):
        self._reported = reported

    def decide_checkin(self, *, now: datetime, cutoff: time) -> StatusDecision:
        return StatusDecision(status=self._reported, note="client reported")
