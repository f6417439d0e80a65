"""Issue bucketing by effective activity date, and blocker detection."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Collection, Iterable
from datetime import datetime

from standup_app.analytics.metrics.timebuckets import calendar_date, to_utc
from standup_app.analytics.metrics.working_days import resolve_reporting_dates
from standup_app.core.config import BLOCKED_STATUS, BLOCKER_LABEL_KEYWORDS
from standup_app.core.models import CategorizationResult, IssueModel, ReportingDates

logger = logging.getLogger(__name__)


def effective_activity_timestamp(issue: IssueModel) -> datetime:
    """Most recent of the issue's update, last comment and last work-log entry.

    Comments and work-logs are ordered oldest first, so only the last entry of
    each list is considered.
    """
    candidates = [issue.updated]
    if issue.comments:
        candidates.append(issue.comments[-1].created)
    if issue.worklogs:
        candidates.append(issue.worklogs[-1].started)
    present = [to_utc(ts) for ts in candidates if ts is not None]
    if not present:
        raise ValueError(f"Issue {issue.key} has no activity timestamp")
    return max(present)


def effective_activity_date(issue: IssueModel, offset_minutes: int = 0) -> str:
    return calendar_date(effective_activity_timestamp(issue), offset_minutes)


def group_by_activity_date(
    issues: Iterable[IssueModel],
    offset_minutes: int = 0,
) -> dict[str, list[IssueModel]]:
    """Map each effective activity date to the issues active that day (input order kept)."""
    grouped: defaultdict[str, list[IssueModel]] = defaultdict(list)
    for issue in issues:
        grouped[effective_activity_date(issue, offset_minutes)].append(issue)
    return dict(grouped)


def is_blocker(issue: IssueModel) -> bool:
    if issue.status == BLOCKED_STATUS:
        return True
    for label in issue.labels or []:
        lowered = str(label).lower()
        if any(keyword in lowered for keyword in BLOCKER_LABEL_KEYWORDS):
            return True
    return False


def find_blockers(issues: Iterable[IssueModel]) -> list[IssueModel]:
    return [issue for issue in issues if is_blocker(issue)]


def classify(
    issues: Iterable[IssueModel],
    working_dates: ReportingDates,
    holidays: Collection[str] = (),
) -> CategorizationResult:
    """Split issues into the yesterday/today buckets plus blockers.

    Raises ValueError when ``working_dates.yesterday_date`` is one of
    ``holidays``; a holiday is never a reporting day.
    """
    if working_dates.yesterday_date and working_dates.yesterday_date in set(holidays):
        raise ValueError(f"Reporting day {working_dates.yesterday_date} is a holiday")
    issues = list(issues)
    grouped = group_by_activity_date(issues, working_dates.offset_minutes)
    yesterday = list(grouped.get(working_dates.yesterday_date, [])) if working_dates.yesterday_date else []
    today = list(grouped.get(working_dates.today_date, []))
    return CategorizationResult(
        yesterday=yesterday,
        today=today,
        blockers=find_blockers(issues),
        yesterday_date=working_dates.yesterday_date,
        today_date=working_dates.today_date,
        is_weekend=working_dates.is_weekend,
    )


def categorize_issues(
    issues: Iterable[IssueModel],
    holidays: Collection[str] = (),
    offset_minutes: int = 0,
    now: datetime | None = None,
) -> CategorizationResult:
    """Group issues by date, resolve the reporting days, then classify."""
    issues = list(issues)
    grouped = group_by_activity_date(issues, offset_minutes)
    dates = resolve_reporting_dates(now, offset_minutes, holidays, activity_by_date=grouped)
    result = classify(issues, dates, holidays)
    logger.info(
        "Categorized: yesterday=%s (%s), today=%s (%s), blockers=%s",
        len(result.yesterday),
        result.yesterday_date or "-",
        len(result.today),
        result.today_date,
        len(result.blockers),
    )
    return result
