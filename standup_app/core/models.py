"""Domain data models for Jira issues and standup categorization."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True)
class CommentModel:
    body: str | None
    author: str | None
    created: datetime | None


@dataclass(slots=True)
class WorklogModel:
    time_spent: str | None
    author: str | None
    started: datetime | None


@dataclass(slots=True)
class ChangeItemModel:
    field: str | None
    from_string: str | None
    to_string: str | None


@dataclass(slots=True)
class HistoryItemModel:
    created: datetime | None
    author: str | None
    items: list[ChangeItemModel] = field(default_factory=list)


@dataclass(slots=True)
class IssueModel:
    key: str
    summary: str | None
    status: str | None
    assignee: str | None
    created: datetime | None
    updated: datetime | None
    issuetype: str | None
    description: str | None = None
    labels: list[str] = field(default_factory=list)
    comments: list[CommentModel] = field(default_factory=list)
    worklogs: list[WorklogModel] = field(default_factory=list)
    histories: list[HistoryItemModel] = field(default_factory=list)


@dataclass(slots=True)
class ReportingDates:
    yesterday_date: str
    today_date: str
    is_weekend: bool
    working_days: tuple[str, ...] = ()
    offset_minutes: int = 0


@dataclass(slots=True)
class CategorizationResult:
    yesterday: list[IssueModel]
    today: list[IssueModel]
    blockers: list[IssueModel]
    yesterday_date: str
    today_date: str
    is_weekend: bool

    def metadata(self) -> dict[str, object]:
        """Metadata frame payload sent ahead of the generated report."""
        return {
            "yesterdayDate": self.yesterday_date,
            "todayDate": self.today_date,
            "isWeekend": self.is_weekend,
        }
