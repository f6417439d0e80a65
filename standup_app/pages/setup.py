"""Connection setup page: Jira credentials, timezone, and public holidays."""

from __future__ import annotations

import logging

import pytz
import streamlit as st

from standup_app.app import register_page
from standup_app.core.config import (
    DEFAULT_TIMEZONE,
    ConfigurationError,
    JiraCredentials,
    load_anthropic_key,
    load_jira_credentials,
)
from standup_app.core.holidays import load_holidays, normalize_holidays
from standup_app.core.jira_client import JiraAPI, JiraSourceError
from standup_app.core.service import StandupService
from standup_app.core.summarizer import ReportSummarizer

logger = logging.getLogger(__name__)


def read_secrets() -> dict:
    """Streamlit secrets as a plain dict; empty when no secrets file exists."""
    try:
        return dict(st.secrets)
    except FileNotFoundError:
        return {}


def build_service(server: str, email: str, token: str, anthropic_key: str | None) -> StandupService:
    api = JiraAPI(server, email, token)
    summarizer = ReportSummarizer(anthropic_key) if anthropic_key else None
    return StandupService(api, summarizer)


def _holiday_editor() -> None:
    if "public_holidays" not in st.session_state:
        try:
            st.session_state["public_holidays"] = load_holidays()
        except ConfigurationError as exc:
            st.warning(str(exc))
            st.session_state["public_holidays"] = []

    st.subheader("Public Holidays (Optional)")
    st.caption("These dates are skipped when picking the previous working day.")
    col_date, col_add = st.columns([3, 1])
    picked = col_date.date_input("Holiday", value=None, key="holiday_picker")
    if col_add.button("Add", disabled=picked is None):
        st.session_state["public_holidays"] = normalize_holidays([*st.session_state["public_holidays"], picked])

    for day in list(st.session_state["public_holidays"]):
        col_label, col_remove = st.columns([3, 1])
        col_label.write(day)
        if col_remove.button("Remove", key=f"remove_{day}"):
            st.session_state["public_holidays"] = [d for d in st.session_state["public_holidays"] if d != day]
            st.rerun()


@register_page("Setup / Connection")
def setup_page():
    st.title("Jira Connection Setup")
    st.caption("Enter credentials (use secrets manager in production).")

    creds = load_jira_credentials(read_secrets())
    server = st.text_input(
        "Jira Organization URL",
        value=st.session_state.get("jira_server") or creds.server or "",
        placeholder="https://your-company.atlassian.net",
    )
    email = st.text_input("Jira Email", value=st.session_state.get("jira_email") or creds.email or "")
    token = st.text_input("Jira API Token", type="password", value=creds.token or "")

    zones = list(pytz.common_timezones)
    current_tz = st.session_state.get("timezone", DEFAULT_TIMEZONE)
    st.session_state["timezone"] = st.selectbox(
        "Timezone",
        zones,
        index=zones.index(current_tz) if current_tz in zones else zones.index(DEFAULT_TIMEZONE),
    )

    _holiday_editor()

    if st.button("Test Connection & Save", type="primary"):
        try:
            JiraCredentials(server=server, email=email, token=token).require()
            service = build_service(server, email, token, load_anthropic_key(read_secrets()))
            with st.spinner("Testing connection..."):
                count = service.test_connection()
        except (ConfigurationError, JiraSourceError) as exc:
            logger.error("Jira connection failed: %s", exc)
            st.error(str(exc))
            return
        st.session_state["jira_server"] = server
        st.session_state["jira_email"] = email
        st.session_state["standup_service"] = service
        st.success(f"Connection successful! Found {count} issues.")
        if service.summarizer is None:
            st.warning("Anthropic API key not configured; report generation is unavailable.")

    if "standup_service" in st.session_state:
        st.info("StandupService ready.")
