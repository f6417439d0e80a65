"""StandupService: orchestrates fetching, categorization, and report streaming."""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Iterator, Sequence
from datetime import datetime, timedelta

import pytz

from standup_app.analytics.segments.buckets import categorize_issues
from standup_app.features.standup.context import build_prompt

from .config import ISSUE_LOOKBACK_DAYS, JIRA_FETCH_BASE_FIELDS, MAX_ISSUES, ConfigurationError
from .framing import frame_report
from .jira_client import JiraAPI, recent_issues_jql
from .mappers import map_issue
from .models import CategorizationResult, IssueModel
from .summarizer import ReportSummarizer

DEFAULT_FIELDS: Sequence[str] = tuple(JIRA_FETCH_BASE_FIELDS)
ProgressCallback = Callable[[str, int | None, int | None], None]

logger = logging.getLogger(__name__)


class StandupService:
    def __init__(self, api: JiraAPI, summarizer: ReportSummarizer | None = None):
        self.api = api
        self.summarizer = summarizer

    # ------------------ Fetch Methods ------------------
    def fetch_recent_issues(
        self,
        *,
        now: datetime | None = None,
        progress: ProgressCallback | None = None,
    ) -> list[IssueModel]:
        """Fetch issues the current user touched within the lookback window."""
        now = now or datetime.now(pytz.UTC)
        since = (now - timedelta(days=ISSUE_LOOKBACK_DAYS)).date()
        if progress:
            progress("Gathering your recently updated issues", None, None)
        raw = self.api.search_enhanced(
            recent_issues_jql(since),
            fields=list(DEFAULT_FIELDS),
            expand=["changelog"],
            max_results=MAX_ISSUES,
        )
        issues = [map_issue(r) for r in raw]
        logger.info("Fetched %s issues from Jira", len(issues))
        return issues

    def test_connection(self) -> int:
        """Run the standup query once and return how many issues it sees."""
        return len(self.fetch_recent_issues())

    # ------------------ Categorization ------------------
    def categorize(
        self,
        issues: Sequence[IssueModel],
        holidays: Collection[str],
        offset_minutes: int,
        now: datetime | None = None,
    ) -> CategorizationResult:
        logger.info("Timezone offset: %s minutes", offset_minutes)
        return categorize_issues(issues, holidays, offset_minutes, now=now)

    # ------------------ Report Streaming ------------------
    def _require_summarizer(self) -> ReportSummarizer:
        if self.summarizer is None:
            raise ConfigurationError("Anthropic API key not configured")
        return self.summarizer

    def stream_report(self, result: CategorizationResult) -> Iterator[str]:
        """Framed stream for an already categorized issue set."""
        summarizer = self._require_summarizer()
        return frame_report(result.metadata(), summarizer.stream(build_prompt(result)))

    def generate_report(
        self,
        holidays: Collection[str],
        offset_minutes: int,
        *,
        now: datetime | None = None,
        progress: ProgressCallback | None = None,
    ) -> Iterator[str]:
        """Fetch, categorize and stream the framed standup report.

        The summarizer is checked before any request is made. The returned
        iterator yields the metadata frame first, then the generated text.
        """
        self._require_summarizer()
        issues = self.fetch_recent_issues(now=now, progress=progress)
        if progress:
            progress("Sorting issues into yesterday and today", None, None)
        result = self.categorize(issues, holidays, offset_minutes, now=now)
        if progress:
            progress("Writing your standup update", None, None)
        return self.stream_report(result)
