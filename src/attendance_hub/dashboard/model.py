from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MonthlySummary:
    present: int
    late: int
    hours: float
    leaves: int

    def as_dict(self) -> dict:
        return {"present": self.present, "late": self.late, "hours": self.hours, "leaves": self.leaves}


@dataclass(frozen=True)
class CompanySnapshot:
    total_employees: int
    present_today: int
    late_today: int
    pending_leaves: int

    def as_dict(self) -> dict:
        return {
            "totalEmployees": self.total_employees,
            "presentToday": self.present_today,
            "lateToday": self.late_today,
            "pendingLeaves": self.pending_leaves,
        }
