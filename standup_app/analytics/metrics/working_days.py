"""Resolve which calendar day counts as "yesterday" for a standup."""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping, Sequence
from datetime import datetime

from standup_app.core.config import WORKING_DAY_CANDIDATES, WORKING_DAY_LOOKBACK_DAYS
from standup_app.core.models import ReportingDates

from .timebuckets import days_before, is_weekend, shifted_now

logger = logging.getLogger(__name__)


def _lookback_dates(now: datetime | None, offset_minutes: int) -> list[str]:
    """Dates 1..WORKING_DAY_LOOKBACK_DAYS days before ``now``, most recent first."""
    return [days_before(now, offset_minutes, i) for i in range(1, WORKING_DAY_LOOKBACK_DAYS + 1)]


def resolve_reporting_dates(
    now: datetime | None,
    offset_minutes: int,
    holidays: Collection[str],
    activity_by_date: Mapping[str, Sequence[object]] | None = None,
) -> ReportingDates:
    """Find today's date and the most recent working day before it.

    Parameters
    ----------
    now : datetime or None
        Reference instant; ``None`` means the current time.
    offset_minutes : int
        User's UTC offset in minutes (positive east of UTC).
    holidays : collection of str
        Public holidays as "YYYY-MM-DD" strings; never eligible.
    activity_by_date : mapping, optional
        Issues grouped by effective activity date. A weekend day is only
        eligible when it has at least one entry here.

    Returns
    -------
    ReportingDates
        ``today_date`` is always the literal current date. ``yesterday_date``
        is the most recent eligible day, or ``""`` when none exists in the
        lookback window.
    """
    activity_by_date = activity_by_date or {}
    holiday_set = set(holidays)
    today = shifted_now(now, offset_minutes).strftime("%Y-%m-%d")
    window = _lookback_dates(now, offset_minutes)

    working_days: list[str] = []
    for day in window:
        if day in holiday_set or is_weekend(day):
            continue
        working_days.append(day)
        if len(working_days) >= WORKING_DAY_CANDIDATES:
            break

    # Weekends count only when there is evidence of work on them
    if len(working_days) < WORKING_DAY_CANDIDATES:
        for day in window:
            if day in holiday_set or day in working_days:
                continue
            if is_weekend(day) and activity_by_date.get(day):
                working_days.append(day)
                if len(working_days) >= WORKING_DAY_CANDIDATES:
                    break

    yesterday = working_days[0] if working_days else ""
    if not yesterday:
        logger.info("No working day found in the last %s days", WORKING_DAY_LOOKBACK_DAYS)
    return ReportingDates(
        yesterday_date=yesterday,
        today_date=today,
        is_weekend=is_weekend(today),
        working_days=tuple(working_days),
        offset_minutes=offset_minutes,
    )
