"""Pure helpers that turn categorized issues into summarizer input (no Streamlit)."""

from __future__ import annotations

from collections.abc import Iterable

from standup_app.analytics.metrics.worklog import format_duration, total_minutes
from standup_app.core.config import RECENT_COMMENTS_SHOWN, RECENT_STATUS_CHANGES_SHOWN
from standup_app.core.models import CategorizationResult, ChangeItemModel, HistoryItemModel, IssueModel

PROMPT_TEMPLATE = """Generate a professional scrum standup update from this Jira data.

CRITICAL RULES:
1. Output ONLY the three sections with these markers: [YESTERDAY] [TODAY] [BLOCKERS]
2. Output NO intro text, NO notes, NO extra explanations
3. For each section, list only bullet points (starting with •)
4. Each bullet point should be 1-2 lines max
5. If a section has no items, leave it empty (no text after marker)
6. Use actual work details from comments, status changes, and time logged - don't just list titles

Format example:
[YESTERDAY]
• Completed authentication flow
• Reviewed PR comments and updated solution

[TODAY]
• Working on API integration
• Debugging database connection issue

[BLOCKERS]
• Waiting on design approval for UI mockups

Here is the issue data:

{issues_text}"""


def _status_item(entry: HistoryItemModel) -> ChangeItemModel | None:
    for item in entry.items:
        if item.field == "status":
            return item
    return None


def format_for_summary(issue: IssueModel) -> str:
    """Render an issue's recent history as a compact text block.

    The block holds, in order: a ``[KEY] summary`` header, the status, the last
    two comments, the total time logged and the last two status transitions.
    Parts without source data are left out.

    Parameters
    ----------
    issue : IssueModel
        Issue with comments/work-logs/histories ordered oldest first.

    Returns
    -------
    str
        Newline-joined block.
    """
    parts: list[str] = [f"[{issue.key}] {issue.summary or ''}".rstrip(), f"Status: {issue.status or ''}"]

    if issue.comments:
        parts.append("\nLatest Comments:")
        for comment in issue.comments[-RECENT_COMMENTS_SHOWN:]:
            parts.append(f'- "{comment.body or ""}"')

    if issue.worklogs:
        minutes = total_minutes(w.time_spent for w in issue.worklogs)
        parts.append(f"\nTime Spent: {format_duration(minutes)}")

    status_changes = [h for h in issue.histories if _status_item(h) is not None]
    if status_changes:
        parts.append("\nRecent Changes:")
        for entry in status_changes[-RECENT_STATUS_CHANGES_SHOWN:]:
            item = _status_item(entry)
            parts.append(f'- Status changed from "{item.from_string or ""}" to "{item.to_string or ""}"')

    return "\n".join(parts)


def _join_blocks(issues: Iterable[IssueModel]) -> str:
    return "\n\n".join(format_for_summary(issue) for issue in issues)


def build_issues_text(result: CategorizationResult) -> str:
    """Three date-labelled blocks: yesterday's work, today's work, blockers."""
    weekend = " - Weekend" if result.is_weekend else ""
    blockers = "\n".join(f"- [{i.key}] {i.summary or ''}" for i in result.blockers)
    return (
        f"Yesterday's Work ({result.yesterday_date}):\n"
        f"{_join_blocks(result.yesterday) or 'No issues'}\n\n"
        f"Today's Work ({result.today_date}{weekend}):\n"
        f"{_join_blocks(result.today) or 'No issues'}\n\n"
        f"Blockers & Impediments:\n"
        f"{blockers or 'No blockers'}\n"
    )


def build_prompt(result: CategorizationResult) -> str:
    return PROMPT_TEMPLATE.format(issues_text=build_issues_text(result))
