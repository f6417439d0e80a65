"""Streamlit rendering for a (possibly still streaming) standup report."""

from __future__ import annotations

import streamlit as st

from standup_app.core.framing import ParsedReport, ReportSection, SectionState, format_date_with_day

EMPTY_MESSAGES = {
    "yesterday": "No activities recorded",
    "today": "No activities recorded",
    "blockers": "No blockers identified",
}
WEEKEND_TODAY_MESSAGE = "Weekend - no work planned"


def section_title(name: str, report: ParsedReport) -> str:
    if name == "yesterday":
        date_label = format_date_with_day(report.yesterday_date)
        return "✅ Yesterday" + (f" - {date_label}" if date_label else "")
    if name == "today":
        date_label = format_date_with_day(report.today_date)
        weekend = " (Weekend)" if report.is_weekend else ""
        return f"✅ Today{weekend}" + (f" - {date_label}" if date_label else "")
    return "🚧 Blockers"


def section_markdown(name: str, section: ReportSection | None, report: ParsedReport) -> str:
    """Markdown list for one section, honouring the arriving/empty/content states."""
    if section is None or section.state is SectionState.ARRIVING:
        return "_Writing..._"
    if section.state is SectionState.EMPTY:
        if name == "today" and report.is_weekend:
            return f"- {WEEKEND_TODAY_MESSAGE}"
        return f"- {EMPTY_MESSAGES[name]}"
    return "\n".join(f"- {line}" for line in section.lines)


def render_report(report: ParsedReport, placeholders: dict[str, object] | None = None) -> None:
    """Render the three sections, into ``placeholders`` when given (for live updates)."""
    for name in ("yesterday", "today", "blockers"):
        section = getattr(report, name)
        body = f"#### {section_title(name, report)}\n{section_markdown(name, section, report)}"
        target = placeholders.get(name) if placeholders else None
        (target or st).markdown(body)
