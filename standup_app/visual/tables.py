"""Reusable table helpers for Streamlit rendering."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd
import streamlit as st

from standup_app.core.config import SETTINGS
from standup_app.core.mappers import issues_to_dataframe
from standup_app.core.models import IssueModel

DISPLAY_ORDER_BUCKET: Sequence[str] = (
    "Ticket",
    "summary",
    "status",
    "issuetype",
    "updated",
    "comments",
    "time_spent",
    "labels",
)


def add_ticket_link(df: pd.DataFrame, server: str, key_col: str = "key", label: str = "Ticket"):
    if df.empty or key_col not in df.columns:
        return df, {}
    out = df.copy()
    base = server.rstrip("/")
    out[label] = out[key_col].astype(str).apply(lambda k: f"{base}/browse/{k}" if k and k != "nan" else "")
    cfg = {
        label: st.column_config.LinkColumn(
            label,
            display_text=r"browse/(.*)$",
            help="Open in Jira",
            width="medium",
        )
    }
    return out, cfg


def render_bucket_table(issues: Sequence[IssueModel], server: str, empty_msg: str) -> None:
    if not issues:
        st.info(empty_msg)
        return
    linked, cfg = add_ticket_link(issues_to_dataframe(issues), server)
    cols = [c for c in DISPLAY_ORDER_BUCKET if c in linked.columns]
    st.dataframe(linked[cols].head(SETTINGS.max_table_rows), hide_index=True, column_config=cfg)
