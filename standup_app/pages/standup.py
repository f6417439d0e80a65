"""Standup Update page: fetch issues, stream the generated report, export it."""

from __future__ import annotations

import logging
from datetime import datetime

import pytz
import streamlit as st

from standup_app.analytics.metrics.timebuckets import offset_minutes_for
from standup_app.app import register_page
from standup_app.core.config import DEFAULT_TIMEZONE, SETTINGS, ConfigurationError
from standup_app.core.framing import iter_parsed, to_plain_text
from standup_app.core.jira_client import JiraSourceError
from standup_app.core.summarizer import SummarizerError
from standup_app.visual.report import render_report
from standup_app.visual.tables import render_bucket_table

logger = logging.getLogger(__name__)


def _render_source_issues(result, server: str) -> None:
    with st.expander("Issues used for this update"):
        tabs = st.tabs(["Yesterday", "Today", "Blockers"])
        with tabs[0]:
            render_bucket_table(result.yesterday, server, "No issues on the previous working day.")
        with tabs[1]:
            render_bucket_table(result.today, server, "No issues updated today.")
        with tabs[2]:
            render_bucket_table(result.blockers, server, "No blocked issues.")


@register_page("Standup Update")
def standup_page():
    st.title("⚡ Standup Update")
    service = st.session_state.get("standup_service")
    if service is None:
        st.info("Connect to Jira on the Setup / Connection page first.")
        return

    tz_name = st.session_state.get("timezone", DEFAULT_TIMEZONE)
    now = datetime.now(pytz.UTC)
    st.caption(f"{now.astimezone(pytz.timezone(tz_name)):%A, %B %d, %Y %I:%M %p} ({tz_name})")

    if st.button("🚀 Generate Standup Update", type="primary"):
        holidays = st.session_state.get("public_holidays", [])
        try:
            offset = offset_minutes_for(tz_name, now)
            with st.status("Preparing your update...") as status:
                issues = service.fetch_recent_issues(
                    now=now, progress=lambda msg, *_: status.update(label=msg)
                )
                result = service.categorize(issues, holidays, offset, now=now)
                status.update(label="Writing your standup update", state="complete")

            placeholders = {name: st.empty() for name in ("yesterday", "today", "blockers")}
            buffer = ""
            for buffer, parsed in iter_parsed(service.stream_report(result)):
                render_report(parsed, placeholders)
        except (ConfigurationError, JiraSourceError, SummarizerError) as exc:
            logger.error("Standup generation failed: %s", exc)
            st.error(str(exc))
            return

        st.session_state["standup_output"] = buffer
        _render_source_issues(result, st.session_state.get("jira_server", ""))

    output = st.session_state.get("standup_output")
    if output:
        plain = to_plain_text(output)
        st.text_area("Plain text", plain, height=220)
        st.download_button(
            "Download as text",
            plain.encode(SETTINGS.download_encoding),
            file_name=f"standup-update-{datetime.now():%Y-%m-%d}.txt",
            mime="text/plain",
        )
