from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class CheckInStrategy(ABC):
    """Strategy Pattern: encapsulate how a check-in status is decided."""

    @abstractmethod
    def decide_checkin(self, *, now: datetime, cutoff: time) -> StatusDecision:
        raise NotImplementedError
