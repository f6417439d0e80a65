"""Standup feature module: summarizer input built from categorized issues."""

from standup_app.features.standup.context import (
    build_issues_text,
    build_prompt,
    format_for_summary,
)

__all__ = [
    "build_issues_text",
    "build_prompt",
    "format_for_summary",
]
