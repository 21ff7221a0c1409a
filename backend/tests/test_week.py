from datetime import datetime, timedelta

import pytest

from analytics.errors import ValidationError
from analytics.week import (
    offset_of, period_label, previous_window, resolve_offset, resolve_window, window_days,
)
from conftest import NOW

FULL_SPAN = timedelta(days=6, hours=23, minutes=59, seconds=59, milliseconds=999)


def test_current_week_starts_on_monday():
    window = resolve_offset(NOW, 0)
    assert window.start == datetime(2025, 10, 6)
    assert window.end == datetime(2025, 10, 12, 23, 59, 59, 999000)


@pytest.mark.parametrize("offset", range(0, -53, -1))
def test_every_window_spans_exactly_one_week(offset):
    window = resolve_offset(NOW, offset)
    assert window.end - window.start == FULL_SPAN
    assert window.start.weekday() == 0
    assert window.start.time() == datetime.min.time()


def test_negative_offset_goes_back_whole_weeks():
    assert resolve_offset(NOW, -1).start == datetime(2025, 9, 29)
    assert resolve_offset(NOW, -52).start == datetime(2024, 10, 7)


def test_week_start_on_week_boundary():
    monday_midnight = datetime(2025, 10, 6, 0, 0)
    sunday_night = datetime(2025, 10, 12, 23, 59)
    assert resolve_offset(monday_midnight, 0).start == datetime(2025, 10, 6)
    assert resolve_offset(sunday_night, 0).start == datetime(2025, 10, 6)


def test_configurable_week_start_day():
    window = resolve_offset(NOW, 0, week_start_day=6)
    assert window.start == datetime(2025, 10, 5)
    assert window.start.weekday() == 6


def test_future_offset_rejected():
    with pytest.raises(ValidationError) as exc:
        resolve_offset(NOW, 1)
    assert exc.value.errors[0]["field"] == "weekOffset"


def test_offset_below_floor_rejected():
    with pytest.raises(ValidationError):
        resolve_offset(NOW, -53)


def test_explicit_dates_snap_to_week_start():
    window = resolve_window(NOW, start_date="2025-10-08", end_date="2025-10-10")
    assert window == resolve_offset(NOW, 0)


def test_explicit_datetimes_are_accepted():
    window = resolve_window(NOW, start_date="2025-09-29T08:30:00Z", end_date="2025-10-05T10:00:00Z")
    assert window.start == datetime(2025, 9, 29)
    assert window.end - window.start == FULL_SPAN


@pytest.mark.parametrize("start_date,end_date,field", [
    ("2025-10-08", "2025-10-07", "endDate"),
    ("2025-10-01", "2025-10-08", "endDate"),
    ("not-a-date", "2025-10-08", "startDate"),
    ("2025-10-06", "2025-13-01", "endDate"),
    ("2025-10-13", "2025-10-14", "startDate"),
    ("2025-10-06", None, "endDate"),
    (None, "2025-10-06", "startDate"),
])
def test_invalid_explicit_dates_rejected(start_date, end_date, field):
    with pytest.raises(ValidationError) as exc:
        resolve_window(NOW, start_date=start_date, end_date=end_date)
    assert exc.value.errors[0]["field"] == field


def test_window_helpers():
    window = resolve_offset(NOW, -2)
    assert offset_of(window, NOW) == -2
    assert previous_window(window) == resolve_offset(NOW, -3)
    days = window_days(window)
    assert len(days) == 7
    assert days[0] == window.start.date()
    assert days[-1] == window.end.date()
    assert period_label(resolve_offset(NOW, 0)) == "Oct 6 - Oct 12, 2025"
