"""Jira API client wrapper (REST v3 + enhanced search pagination)."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import requests
from jira import JIRA, JIRAError

logger = logging.getLogger(__name__)


class JiraSourceError(RuntimeError):
    """Jira rejected or failed a request. Not retried."""


def _error_message(resp) -> str:
    try:
        data = resp.json()
    except ValueError:
        data = {}
    messages = data.get("errorMessages") if isinstance(data, dict) else None
    if messages:
        return str(messages[0])
    return f"HTTP {resp.status_code}"


def _jira_error_message(exc: JIRAError) -> str:
    if exc.response is not None:
        return _error_message(exc.response)
    return exc.text or str(exc)


def recent_issues_jql(since: date) -> str:
    """Issues the current user holds or held, touched since ``since``."""
    since_str = since.strftime("%Y-%m-%d")
    return (
        "(assignee = currentUser() OR assignee was currentUser()) "
        f"AND (updated >= '{since_str}' OR created >= '{since_str}') "
        "ORDER BY updated DESC"
    )


class JiraAPI:
    def __init__(self, server: str, email: str, token: str):
        self.server = server.rstrip("/")
        try:
            self.client = JIRA(
                basic_auth=(email, token),
                options={"server": self.server, "rest_api_version": "3"},
                get_server_info=False,
                max_retries=0,
            )
        except JIRAError as exc:  # pragma: no cover - network error path
            raise JiraSourceError(f"Jira API Error: {exc.text or exc}") from exc

    def search_enhanced(
        self,
        jql: str,
        fields: list[str] | None = None,
        expand: list[str] | None = None,
        page_size: int = 100,
        max_results: int | None = None,
    ) -> list[dict[str, Any]]:
        session = getattr(self.client, "_session", None)
        if session is None:
            raise JiraSourceError("Jira session unavailable")
        url = f"{self.server}/rest/api/3/search/jql"
        params = {"jql": jql, "maxResults": page_size}
        if fields:
            params["fields"] = ",".join(fields)
        if expand:
            params["expand"] = ",".join(expand)
        out: list[dict[str, Any]] = []
        token = None
        while True:
            qp = dict(params)
            if token:
                qp["nextPageToken"] = token
            try:
                resp = session.get(url, params=qp)
            except JIRAError as exc:
                raise JiraSourceError(f"Jira API Error: {_jira_error_message(exc)}") from exc
            except requests.RequestException as exc:
                raise JiraSourceError(f"Jira API Error: {exc}") from exc
            if resp.status_code >= 400:
                raise JiraSourceError(f"Jira API Error: {_error_message(resp)}")
            data = resp.json()
            out.extend(data.get("issues", []))
            logger.debug("Fetched %s issues so far", len(out))
            token = data.get("nextPageToken")
            if max_results is not None and len(out) >= max_results:
                return out[:max_results]
            if not token or data.get("isLast") is True:
                break
        return out
