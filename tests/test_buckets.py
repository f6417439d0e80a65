from datetime import UTC, datetime

import pytest

from standup_app.analytics.metrics.working_days import resolve_reporting_dates
from standup_app.analytics.segments.buckets import (
    categorize_issues,
    classify,
    effective_activity_date,
    find_blockers,
    group_by_activity_date,
    is_blocker,
)
from standup_app.core.models import CommentModel, IssueModel, ReportingDates, WorklogModel


def _issue(key, updated, status="In Progress", labels=None, comments=None, worklogs=None):
    return IssueModel(
        key=key,
        summary=f"Summary {key}",
        status=status,
        assignee="Alice",
        created=datetime(2024, 1, 1, tzinfo=UTC),
        updated=updated,
        issuetype="Task",
        labels=labels or [],
        comments=comments or [],
        worklogs=worklogs or [],
    )


def test_yesterday_today_and_blockers_scenario():
    now = datetime(2024, 1, 10, 12, tzinfo=UTC)
    done = _issue("OBS-1", datetime(2024, 1, 9, 14, tzinfo=UTC), status="Done")
    active = _issue("OBS-2", datetime(2024, 1, 10, 9, tzinfo=UTC), labels=["blocker"])
    result = categorize_issues([done, active], set(), 0, now=now)
    assert [i.key for i in result.yesterday] == ["OBS-1"]
    assert [i.key for i in result.today] == ["OBS-2"]
    assert [i.key for i in result.blockers] == ["OBS-2"]
    assert result.yesterday_date == "2024-01-09"
    assert result.today_date == "2024-01-10"
    assert result.is_weekend is False


def test_weekend_activity_becomes_yesterday_when_weekdays_are_holidays():
    now = datetime(2024, 1, 15, 9, tzinfo=UTC)  # Monday
    holidays = {f"2024-01-{d:02d}" for d in (2, 3, 4, 5, 8, 9, 10, 11, 12)}
    saturday = [
        _issue("OBS-1", datetime(2024, 1, 13, 10, tzinfo=UTC)),
        _issue("OBS-2", datetime(2024, 1, 13, 16, tzinfo=UTC)),
    ]
    result = categorize_issues(saturday, holidays, 0, now=now)
    assert result.yesterday_date == "2024-01-13"
    assert [i.key for i in result.yesterday] == ["OBS-1", "OBS-2"]
    assert result.today == []


def test_effective_date_uses_latest_comment_or_worklog():
    updated = datetime(2024, 1, 8, 10, tzinfo=UTC)
    commented = _issue("OBS-1", updated, comments=[CommentModel("hi", "Bob", datetime(2024, 1, 9, 10, tzinfo=UTC))])
    logged = _issue(
        "OBS-2",
        updated,
        worklogs=[WorklogModel("1h", "Bob", datetime(2024, 1, 10, 8, tzinfo=UTC))],
    )
    assert effective_activity_date(commented) == "2024-01-09"
    assert effective_activity_date(logged) == "2024-01-10"


def test_effective_date_only_considers_last_list_entry():
    issue = _issue(
        "OBS-1",
        datetime(2024, 1, 8, 10, tzinfo=UTC),
        comments=[
            CommentModel("newer but first", "Bob", datetime(2024, 1, 11, 10, tzinfo=UTC)),
            CommentModel("last", "Bob", datetime(2024, 1, 7, 10, tzinfo=UTC)),
        ],
    )
    assert effective_activity_date(issue) == "2024-01-08"


def test_group_by_activity_date_respects_offset():
    late = _issue("OBS-1", datetime(2024, 1, 9, 23, 30, tzinfo=UTC))
    early = _issue("OBS-2", datetime(2024, 1, 10, 1, tzinfo=UTC))
    grouped = group_by_activity_date([late, early], offset_minutes=60)
    assert list(grouped) == ["2024-01-10"]
    assert [i.key for i in grouped["2024-01-10"]] == ["OBS-1", "OBS-2"]


def test_blocker_detection():
    updated = datetime(2024, 1, 9, tzinfo=UTC)
    assert is_blocker(_issue("A", updated, status="Blocked"))
    assert is_blocker(_issue("B", updated, labels=["Team-Impediment"]))
    assert is_blocker(_issue("C", updated, labels=["ux", "EXTERNAL-BLOCKER"]))
    assert not is_blocker(_issue("D", updated, status="blocked"))
    assert not is_blocker(_issue("E", updated, labels=["blocked-by-design"]))


def test_blockers_are_independent_of_dates():
    old = _issue("OBS-9", datetime(2023, 12, 1, tzinfo=UTC), status="Blocked")
    recent = _issue("OBS-1", datetime(2024, 1, 9, tzinfo=UTC))
    assert [i.key for i in find_blockers([recent, old])] == ["OBS-9"]


def test_classify_with_empty_yesterday_date():
    issue = _issue("OBS-1", datetime(2024, 1, 10, 9, tzinfo=UTC))
    dates = ReportingDates(yesterday_date="", today_date="2024-01-10", is_weekend=False)
    result = classify([issue], dates, set())
    assert result.yesterday == []
    assert [i.key for i in result.today] == ["OBS-1"]


def test_classify_uses_resolver_output():
    now = datetime(2024, 1, 8, 9, tzinfo=UTC)
    friday = _issue("OBS-1", datetime(2024, 1, 5, 17, tzinfo=UTC))
    saturday = _issue("OBS-2", datetime(2024, 1, 6, 11, tzinfo=UTC))
    dates = resolve_reporting_dates(now, 0, set())
    result = classify([friday, saturday], dates, set())
    assert [i.key for i in result.yesterday] == ["OBS-1"]
    assert result.metadata() == {"yesterdayDate": "2024-01-05", "todayDate": "2024-01-08", "isWeekend": False}


def test_classify_rejects_holiday_as_reporting_day():
    dates = ReportingDates(yesterday_date="2024-01-09", today_date="2024-01-10", is_weekend=False)
    with pytest.raises(ValueError, match="holiday"):
        classify([], dates, {"2024-01-09"})
