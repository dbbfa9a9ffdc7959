from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from ..core.constants import DEFAULT_CHECKIN_CUTOFF
from ..core.enums import AttendanceStatus
from .strategies.base import CheckInStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy
from .strategies.reported_strategy import ReportedStatusStrategy


@dataclass
class CheckInStatusFactory:
    """Factory Pattern: choose the strategy that decides a check-in status.

    Late means strictly after the cutoff on the server clock. The reported
    status only wins when trust_client_status is enabled.
    """

    cutoff: time = DEFAULT_CHECKIN_CUTOFF
    trust_client_status: bool = False

    def for_checkin(self, *, now: datetime, reported: Optional[AttendanceStatus] = None) -> CheckInStrategy:
        if self.trust_client_status and reported is not None:
            return ReportedStatusStrategy(reported)

        if now.time() > self.cutoff:
            return LateStrategy()
        return OnTimeStrategy()
