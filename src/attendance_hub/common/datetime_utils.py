from __future__ import annotations

from datetime import date, datetime, time
from typing import Protocol

from ..core.exceptions import InvalidInput
from .validators import as_text


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    """Server-side wall clock (local time)."""

    def now(self) -> datetime:
        return now_local()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(as_text(value), "%Y-%m-%d").date()
    except ValueError:
        raise InvalidInput(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_hhmm(value: str) -> time:
    """Parse HH:MM (settings values such as CHECKIN_CUTOFF)."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def parse_month(value: str) -> tuple[date, date]:
    """Parse YYYY-MM into [first day of month, first day of next month)."""
    try:
        first = datetime.strptime(as_text(value), "%Y-%m").date()
    except ValueError:
        raise InvalidInput(f"Invalid month (YYYY-MM): {value!r}")
    return first, next_month(first)


def next_month(first: date) -> date:
    if first.month == 12:
        return date(first.year + 1, 1, 1)
    return date(first.year, first.month + 1, 1)


def hours_between(work_date: date, start: time, end: time) -> float:
    """Hours from start to end, both taken as wall-clock times on work_date.

    No midnight rollover: an end earlier than start gives a negative result.
    """
    delta = datetime.combine(work_date, end) - datetime.combine(work_date, start)
    return delta.total_seconds() / 3600
