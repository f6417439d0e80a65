"""Mapping raw Jira issue JSON into IssueModel instances."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

import pandas as pd

from standup_app.analytics.metrics.worklog import format_duration, total_minutes

from .models import ChangeItemModel, CommentModel, HistoryItemModel, IssueModel, WorklogModel


def extract_text_from_adf(body) -> str:
    """Extract plain text from Atlassian Document Format (ADF) content.

    Jira Cloud REST v3 returns comment bodies and descriptions as ADF JSON.
    Text nodes are collected recursively; paragraphs are joined by spaces.

    Parameters
    ----------
    body : str, dict, list or None
        ADF document, a JSON string holding one, or plain text.

    Returns
    -------
    str
        Plain text content.
    """
    if body is None:
        return ""

    if isinstance(body, str):
        stripped = body.strip()
        if stripped.startswith("{") and '"type"' in stripped:
            try:
                body = json.loads(stripped)
            except (json.JSONDecodeError, ValueError):
                return stripped
        else:
            return stripped

    if isinstance(body, dict):
        texts: list[str] = []
        if body.get("type") == "text" and "text" in body:
            texts.append(str(body["text"]))
        content = body.get("content")
        if isinstance(content, list):
            for item in content:
                extracted = extract_text_from_adf(item)
                if extracted:
                    texts.append(extracted)
        return " ".join(texts)

    if isinstance(body, list):
        return " ".join(t for t in (extract_text_from_adf(item) for item in body) if t)

    return str(body)


def parse_dt(val):
    if not val:
        return None
    ts = pd.to_datetime(val, utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts.to_pydatetime()


def _display_name(value: Any) -> str | None:
    if isinstance(value, dict):
        return value.get("displayName") or value.get("name")
    return None


def _name(value: Any) -> str | None:
    if isinstance(value, dict):
        return value.get("name")
    return None


def map_issue(raw: dict[str, Any]) -> IssueModel:
    fields = raw.get("fields", {}) or {}

    comments_raw = (fields.get("comment") or {}).get("comments", []) or []
    comments = [
        CommentModel(
            body=extract_text_from_adf(c.get("body")),
            author=_display_name(c.get("author")),
            created=parse_dt(c.get("created")),
        )
        for c in comments_raw
    ]

    worklogs_raw = (fields.get("worklog") or {}).get("worklogs", []) or []
    worklogs = [
        WorklogModel(
            time_spent=w.get("timeSpent"),
            author=_display_name(w.get("author")),
            started=parse_dt(w.get("started")),
        )
        for w in worklogs_raw
    ]

    histories_raw = (raw.get("changelog") or {}).get("histories", []) or []
    histories = [
        HistoryItemModel(
            created=parse_dt(h.get("created")),
            author=_display_name(h.get("author")),
            items=[
                ChangeItemModel(
                    field=it.get("field"),
                    from_string=it.get("fromString"),
                    to_string=it.get("toString"),
                )
                for it in (h.get("items") or [])
            ],
        )
        for h in histories_raw
    ]

    description = fields.get("description")
    return IssueModel(
        key=raw.get("key"),
        summary=fields.get("summary"),
        status=_name(fields.get("status")),
        assignee=_display_name(fields.get("assignee")),
        created=parse_dt(fields.get("created")),
        updated=parse_dt(fields.get("updated")),
        issuetype=_name(fields.get("issuetype")),
        description=extract_text_from_adf(description) if description else None,
        labels=list(fields.get("labels", []) or []),
        comments=comments,
        worklogs=worklogs,
        histories=histories,
    )


def issues_to_dataframe(issues: Iterable[IssueModel]) -> pd.DataFrame:
    rows = []
    for i in issues:
        rows.append(
            {
                "key": i.key,
                "summary": i.summary,
                "status": i.status,
                "issuetype": i.issuetype,
                "assignee": i.assignee or "Unassigned",
                "created": i.created,
                "updated": i.updated,
                "labels": ", ".join(sorted({v for v in i.labels if v}, key=str.lower)),
                "comments": len(i.comments),
                "time_spent": format_duration(total_minutes(w.time_spent for w in i.worklogs))
                if i.worklogs
                else "",
            }
        )
    return pd.DataFrame(rows)
