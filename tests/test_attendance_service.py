from __future__ import annotations

from datetime import date, datetime, time

import pytest

from attendance_hub.attendance.factory import CheckInStatusFactory
from attendance_hub.attendance.model import AttendanceRecord, Location
from attendance_hub.attendance.service import AttendanceService
from attendance_hub.core.constants import LATE_TITLE
from attendance_hub.core.enums import AttendanceStatus
from attendance_hub.core.exceptions import AlreadyCheckedIn, AlreadyCheckedOut, InvalidInput, NotCheckedIn
from attendance_hub.notifications.service import NotificationService

from conftest import BrokenNotifications, FixedClock


def _service(attendance_repo, notifications_repo, now: datetime, **kwargs) -> AttendanceService:
    clock = FixedClock(now)
    return AttendanceService(
        attendance_repo,
        NotificationService(notifications_repo, clock=clock),
        clock=clock,
        **kwargs,
    )


def test_checkin_then_checkout_records_hours(attendance_repo, notifications_repo):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 8, 0, 0))
    svc.check_in(2, location={"latitude": 10.77, "longitude": 106.7}, photo="in.jpg")

    svc.check_out(2, now=datetime(2025, 1, 6, 17, 30, 0), location=[10.78, 106.71], photo="out.jpg")

    rec = attendance_repo.get_for_user_and_date(2, date(2025, 1, 6))
    assert rec.check_in == time(8, 0)
    assert rec.check_out == time(17, 30)
    assert rec.total_hours == 9.5
    assert rec.status == AttendanceStatus.PRESENT
    assert rec.location_in == Location(10.77, 106.7)
    assert rec.location_out == Location(10.78, 106.71)
    assert rec.photo_in == "in.jpg"
    assert rec.photo_out == "out.jpg"


def test_hours_are_rounded_to_two_decimals(attendance_repo, notifications_repo):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 8, 0, 0))
    svc.check_in(2)
    svc.check_out(2, now=datetime(2025, 1, 6, 8, 20, 0))

    assert attendance_repo.get_for_user_and_date(2, date(2025, 1, 6)).total_hours == 0.33


def test_second_checkin_same_day_is_rejected(attendance_repo, notifications_repo):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 8, 0, 0))
    svc.check_in(2)

    with pytest.raises(AlreadyCheckedIn):
        svc.check_in(2, now=datetime(2025, 1, 6, 8, 5, 0))

    assert attendance_repo.count_for_date(date(2025, 1, 6)) == 1


def test_checkin_after_checkout_is_rejected(attendance_repo, notifications_repo):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 8, 0, 0))
    svc.check_in(2)
    svc.check_out(2, now=datetime(2025, 1, 6, 17, 0, 0))

    with pytest.raises(AlreadyCheckedIn):
        svc.check_in(2, now=datetime(2025, 1, 6, 18, 0, 0))


def test_checkout_without_checkin(attendance_repo, notifications_repo):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 17, 0, 0))

    with pytest.raises(NotCheckedIn):
        svc.check_out(2)


def test_second_checkout_is_rejected_and_keeps_first_values(attendance_repo, notifications_repo):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 8, 0, 0))
    svc.check_in(2)
    svc.check_out(2, now=datetime(2025, 1, 6, 17, 0, 0))

    with pytest.raises(AlreadyCheckedOut):
        svc.check_out(2, now=datetime(2025, 1, 6, 18, 0, 0))

    rec = attendance_repo.get_for_user_and_date(2, date(2025, 1, 6))
    assert rec.check_out == time(17, 0)
    assert rec.total_hours == 9.0


def test_checkout_keeps_status(attendance_repo, notifications_repo):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 9, 30, 0))
    svc.check_in(2)
    svc.check_out(2, now=datetime(2025, 1, 6, 18, 0, 0))

    assert attendance_repo.get_for_user_and_date(2, date(2025, 1, 6)).status == AttendanceStatus.LATE


def test_late_checkin_creates_notification(attendance_repo, notifications_repo):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 9, 15, 0))
    svc.check_in(2)

    rec = attendance_repo.get_for_user_and_date(2, date(2025, 1, 6))
    assert rec.status == AttendanceStatus.LATE
    titles = [n.title for n in notifications_repo.for_user(2)]
    assert titles == [LATE_TITLE]


def test_checkin_exactly_at_cutoff_is_present(attendance_repo, notifications_repo):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 9, 0, 0))
    svc.check_in(2)

    assert attendance_repo.get_for_user_and_date(2, date(2025, 1, 6)).status == AttendanceStatus.PRESENT
    assert notifications_repo.for_user(2) == []


def test_failed_late_notification_does_not_fail_checkin(attendance_repo):
    svc = _service(attendance_repo, BrokenNotifications(), datetime(2025, 1, 6, 9, 45, 0))
    svc.check_in(2)

    assert attendance_repo.get_for_user_and_date(2, date(2025, 1, 6)).status == AttendanceStatus.LATE


def test_server_clock_overrides_reported_status(attendance_repo, notifications_repo):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 9, 20, 0))
    svc.check_in(2, reported_status="present")

    assert attendance_repo.get_for_user_and_date(2, date(2025, 1, 6)).status == AttendanceStatus.LATE


def test_trusted_reported_status_is_persisted(attendance_repo, notifications_repo):
    svc = _service(
        attendance_repo,
        notifications_repo,
        datetime(2025, 1, 6, 9, 20, 0),
        status_factory=CheckInStatusFactory(trust_client_status=True),
    )
    svc.check_in(2, reported_status="present")

    assert attendance_repo.get_for_user_and_date(2, date(2025, 1, 6)).status == AttendanceStatus.PRESENT
    assert notifications_repo.for_user(2) == []


@pytest.mark.parametrize("reported", ["absent", "leave", "sleeping"])
def test_reported_status_must_be_present_or_late(attendance_repo, notifications_repo, reported):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 8, 0, 0))

    with pytest.raises(InvalidInput):
        svc.check_in(2, reported_status=reported)
    assert attendance_repo.get_for_user_and_date(2, date(2025, 1, 6)) is None


def test_malformed_location_is_rejected(attendance_repo, notifications_repo):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 8, 0, 0))

    with pytest.raises(InvalidInput):
        svc.check_in(2, location={"latitude": 10.0})


def test_negative_hours_are_kept(attendance_repo, notifications_repo):
    attendance_repo.add(
        AttendanceRecord(
            attendance_id=99,
            user_id=2,
            work_date=date(2025, 1, 6),
            check_in=time(22, 0),
            check_out=None,
            status=AttendanceStatus.LATE,
        )
    )
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 6, 0, 0))
    svc.check_out(2)

    assert attendance_repo.get_for_user_and_date(2, date(2025, 1, 6)).total_hours == -16.0


def test_history_is_newest_first_and_limited(attendance_repo, notifications_repo):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 8, 0, 0), history_limit=2)
    for day in (6, 7, 8):
        svc.check_in(2, now=datetime(2025, 1, day, 8, 0, 0))

    rows = svc.get_history(2)
    assert [r.work_date.day for r in rows] == [8, 7]
    assert len(svc.get_history(2, limit=10)) == 3

    with pytest.raises(InvalidInput):
        svc.get_history(2, limit=0)


def test_get_today_uses_clock(attendance_repo, notifications_repo):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 8, 0, 0))
    assert svc.get_today(2) is None

    svc.check_in(2)
    assert svc.get_today(2).check_in == time(8, 0)


def test_webcam_data_url_is_stored(attendance_repo, notifications_repo):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 8, 0, 0))
    screenshot = "data:image/jpeg;base64," + "A" * 60000

    svc.check_in(2, photo=screenshot)

    assert attendance_repo.get_for_user_and_date(2, date(2025, 1, 6)).photo_in == screenshot


@pytest.mark.parametrize("photo", [123, {"src": "x"}, ["a"]])
def test_non_string_photo_is_rejected(attendance_repo, notifications_repo, photo):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 8, 0, 0))

    with pytest.raises(InvalidInput):
        svc.check_in(2, photo=photo)
    assert attendance_repo.get_for_user_and_date(2, date(2025, 1, 6)) is None


def test_oversized_photo_is_rejected_at_checkout(attendance_repo, notifications_repo, monkeypatch):
    import attendance_hub.attendance.service as service_module

    monkeypatch.setattr(service_module, "MAX_PHOTO_LENGTH", 10)
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 8, 0, 0))
    svc.check_in(2, photo="short")

    with pytest.raises(InvalidInput):
        svc.check_out(2, now=datetime(2025, 1, 6, 17, 0), photo="x" * 11)
    assert attendance_repo.get_for_user_and_date(2, date(2025, 1, 6)).check_out is None


def test_late_checkin_logs_minutes_late(attendance_repo, notifications_repo, caplog):
    svc = _service(attendance_repo, notifications_repo, datetime(2025, 1, 6, 9, 12, 0))

    with caplog.at_level("INFO", logger="attendance_hub.attendance.service"):
        svc.check_in(2)

    assert "late by 12 min" in caplog.text
