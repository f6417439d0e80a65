"""Calendar-date bucketing in a fixed UTC-offset frame.

All date math here happens on UTC instants shifted by the user's offset, so
the calendar date and the day of week always come from the same frame.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pandas as pd
import pytz

from standup_app.core.config import ConfigurationError

DATE_FORMAT = "%Y-%m-%d"


def to_utc(value) -> datetime:
    """Convert a timestamp-like value into an aware UTC datetime.

    Naive values are taken as UTC. Unlike the lenient parsing used for display,
    a malformed or missing value raises ``ValueError``.
    """
    if value is None or value == "":
        raise ValueError("timestamp is required")
    ts = pd.Timestamp(value)
    if pd.isna(ts):
        raise ValueError(f"invalid timestamp: {value!r}")
    if ts.tzinfo is None:
        ts = ts.tz_localize(pytz.UTC)
    else:
        ts = ts.tz_convert(pytz.UTC)
    return ts.to_pydatetime()


def shifted_now(now: datetime | None, offset_minutes: int) -> datetime:
    """Return ``now`` (default: current time) moved into the shifted-UTC frame."""
    base = datetime.now(pytz.UTC) if now is None else to_utc(now)
    return base + timedelta(minutes=offset_minutes)


def calendar_date(timestamp, offset_minutes: int = 0) -> str:
    """Calendar date ("YYYY-MM-DD") of ``timestamp`` after adding the offset."""
    shifted = to_utc(timestamp) + timedelta(minutes=offset_minutes)
    return shifted.strftime(DATE_FORMAT)


def parse_calendar_date(value: str) -> date:
    return datetime.strptime(value, DATE_FORMAT).date()


def is_weekend(value: str | date) -> bool:
    """True when the date falls on a Saturday or Sunday."""
    day = parse_calendar_date(value) if isinstance(value, str) else value
    return day.weekday() >= 5


def days_before(now: datetime | None, offset_minutes: int, days: int) -> str:
    return (shifted_now(now, offset_minutes) - timedelta(days=days)).strftime(DATE_FORMAT)


def offset_minutes_for(tz_name: str, at: datetime | None = None) -> int:
    """UTC offset in minutes (positive east of UTC) of ``tz_name`` at ``at``."""
    try:
        tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError as exc:
        raise ConfigurationError(f"Unknown timezone: {tz_name}") from exc
    moment = datetime.now(pytz.UTC) if at is None else to_utc(at)
    offset = moment.astimezone(tz).utcoffset()
    return int(offset.total_seconds() // 60) if offset is not None else 0
