"""Central configuration, constants, and credential loading."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any


class ConfigurationError(ValueError):
    """Missing or malformed configuration, raised before any network call."""


# =============================================================================
# Timezone
# =============================================================================
DEFAULT_TIMEZONE = "UTC"

# =============================================================================
# Working-day resolution
# =============================================================================
# Days strictly before "today" that are scanned for a reporting day
WORKING_DAY_LOOKBACK_DAYS: int = 13
# Candidate working days collected before the scan stops
WORKING_DAY_CANDIDATES: int = 2
# Days of issue history requested from Jira (covers the scan window + today)
ISSUE_LOOKBACK_DAYS: int = 14
MAX_ISSUES: int = 100

# =============================================================================
# Blocker detection
# =============================================================================
BLOCKED_STATUS = "Blocked"
# Matched case-insensitively as substrings of issue labels
BLOCKER_LABEL_KEYWORDS: Sequence[str] = ("blocker", "impediment")

# =============================================================================
# Work-log duration units (minutes). A "day" is one 8-hour workday.
# =============================================================================
DURATION_UNIT_MINUTES: dict[str, int] = {
    "h": 60,
    "d": 480,
    "m": 1,
}

# =============================================================================
# Context formatting
# =============================================================================
RECENT_COMMENTS_SHOWN: int = 2
RECENT_STATUS_CHANGES_SHOWN: int = 2

# =============================================================================
# Stream framing
# =============================================================================
META_OPEN = "[META]"
META_CLOSE = "[|META]"
SECTION_MARKERS: Sequence[str] = ("[YESTERDAY]", "[TODAY]", "[BLOCKERS]")
BULLET_GLYPH = "•"

# =============================================================================
# Text generation
# =============================================================================
DEFAULT_MODEL = "claude-3-5-haiku-20241022"
DEFAULT_MAX_TOKENS: int = 1500

# Canonical field list for Jira fetches (changelog is requested via expand)
JIRA_FETCH_BASE_FIELDS = [
    "summary",
    "status",
    "assignee",
    "created",
    "updated",
    "issuetype",
    "description",
    "labels",
    "comment",
    "worklog",
]


@dataclass(slots=True)
class AppSettings:
    max_table_rows: int = 100
    download_encoding: str = "utf-8"
    holidays_file: str = "holidays.yaml"


SETTINGS = AppSettings()


@dataclass(slots=True)
class JiraCredentials:
    server: str | None
    email: str | None
    token: str | None

    def missing(self) -> list[str]:
        return [name for name in ("server", "email", "token") if not getattr(self, name)]

    def require(self) -> JiraCredentials:
        """Return self, or raise ConfigurationError naming the missing fields."""
        missing = self.missing()
        if missing:
            raise ConfigurationError(f"Missing Jira configuration: {', '.join(missing)}")
        return self


def _lookup(secrets: Mapping[str, Any], section: str, *names: str) -> str | None:
    scoped = secrets.get(section) or {}
    for name in names:
        value = scoped.get(name) or secrets.get(name)
        if value:
            return str(value)
    return None


def load_jira_credentials(
    secrets: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> JiraCredentials:
    """Read Jira credentials from Streamlit-style secrets, then the environment.

    Secrets may hold a ``[jira]`` table or top-level keys. Nothing is validated
    here; call ``JiraCredentials.require()`` before connecting.
    """
    secrets = secrets or {}
    environ = os.environ if environ is None else environ
    server = _lookup(secrets, "jira", "JIRA_SERVER") or environ.get("JIRA_URL") or environ.get("JIRA_SERVER")
    email = _lookup(secrets, "jira", "JIRA_EMAIL") or environ.get("JIRA_EMAIL")
    token = _lookup(secrets, "jira", "JIRA_API_TOKEN", "JIRA_TOKEN") or environ.get("JIRA_API_TOKEN")
    return JiraCredentials(server=server or None, email=email or None, token=token or None)


def load_anthropic_key(
    secrets: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> str | None:
    secrets = secrets or {}
    environ = os.environ if environ is None else environ
    return (
        _lookup(secrets, "anthropic", "ANTHROPIC_API_KEY", "CLAUDE_API_KEY")
        or environ.get("ANTHROPIC_API_KEY")
        or environ.get("CLAUDE_API_KEY")
    )
