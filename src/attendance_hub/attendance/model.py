from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class Location:
    """Coordinate pair captured by the client at check-in/check-out."""

    latitude: float
    longitude: float

    @classmethod
    def from_value(cls, value) -> Optional["Location"]:
        """Accept {"latitude", "longitude"}, {"lat", "lng"} or a [lat, lng] pair."""
        if value is None:
            return None
        if isinstance(value, Location):
            return value
        if isinstance(value, dict):
            lat = value.get("latitude", value.get("lat"))
            lng = value.get("longitude", value.get("lng"))
        elif isinstance(value, (list, tuple)) and len(value) == 2:
            lat, lng = value
        else:
            raise ValueError(f"Unsupported location value: {value!r}")
        if lat is None or lng is None:
            raise ValueError(f"Incomplete location value: {value!r}")
        return cls(latitude=float(lat), longitude=float(lng))

    def as_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar date."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in: Optional[time]
    check_out: Optional[time]
    status: AttendanceStatus
    location_in: Optional[Location] = None
    location_out: Optional[Location] = None
    photo_in: Optional[str] = None
    photo_out: Optional[str] = None
    total_hours: Optional[float] = None
    # read-model fields filled by joined queries
    employee_name: Optional[str] = None
    division: Optional[str] = None

    @property
    def is_checked_out(self) -> bool:
        return self.check_out is not None


@dataclass(frozen=True)
class MonthlyTotals:
    """Aggregates over one employee's ledger rows in a date range."""

    present: int
    late: int
    hours: float
