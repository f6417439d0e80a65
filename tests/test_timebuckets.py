from datetime import UTC, datetime, timedelta

import pytest

from standup_app.analytics.metrics.timebuckets import (
    calendar_date,
    days_before,
    is_weekend,
    offset_minutes_for,
)
from standup_app.core.config import ConfigurationError


def test_calendar_date_applies_offset():
    assert calendar_date("2024-01-05T23:30:00.000+0000", 60) == "2024-01-06"
    assert calendar_date("2024-01-05T02:00:00.000+0000", -300) == "2024-01-04"
    assert calendar_date("2024-01-05T02:00:00.000+0000", 0) == "2024-01-05"


def test_calendar_date_converts_foreign_offsets_to_utc_first():
    # 01:00 at +05:30 is 19:30 UTC on the previous day
    assert calendar_date("2024-01-05T01:00:00.000+0530", 0) == "2024-01-04"


def test_calendar_date_naive_datetime_is_utc():
    assert calendar_date(datetime(2024, 1, 5, 23, 0), 120) == "2024-01-06"


def test_calendar_date_monotonic_in_time():
    start = datetime(2024, 1, 1, tzinfo=UTC)
    for offset in (-720, -300, 0, 330, 840):
        dates = [calendar_date(start + timedelta(hours=h), offset) for h in range(0, 24 * 10, 3)]
        assert dates == sorted(dates)


def test_calendar_date_rejects_malformed_timestamps():
    with pytest.raises(ValueError):
        calendar_date("not a date", 0)
    with pytest.raises(ValueError):
        calendar_date(None, 0)


def test_is_weekend():
    assert is_weekend("2024-01-06")  # Saturday
    assert is_weekend("2024-01-07")  # Sunday
    assert not is_weekend("2024-01-05")
    assert not is_weekend("2024-01-08")


def test_days_before_uses_shifted_frame():
    now = datetime(2024, 1, 8, 23, 30, tzinfo=UTC)
    assert days_before(now, 0, 1) == "2024-01-07"
    assert days_before(now, 60, 1) == "2024-01-08"


def test_offset_minutes_for_timezones():
    winter = datetime(2024, 1, 5, 12, tzinfo=UTC)
    summer = datetime(2024, 7, 5, 12, tzinfo=UTC)
    assert offset_minutes_for("UTC", winter) == 0
    assert offset_minutes_for("Asia/Kolkata", winter) == 330
    assert offset_minutes_for("America/New_York", winter) == -300
    assert offset_minutes_for("America/New_York", summer) == -240
    with pytest.raises(ConfigurationError):
        offset_minutes_for("Mars/Olympus_Mons", winter)
