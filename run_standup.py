"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_standup.py

Automatically imports every module in ``standup_app/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from standup_app.app import main
from standup_app.core.config import load_anthropic_key, load_jira_credentials

st.set_page_config(page_title="Standup Update Generator", layout="centered")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _auto_init_standup_service():
    """Initialize the standup service from Streamlit secrets or environment if available."""
    if "standup_service" in st.session_state:
        return

    from standup_app.pages.setup import build_service, read_secrets

    secrets = read_secrets()
    creds = load_jira_credentials(secrets)
    if creds.missing():
        st.sidebar.warning("Jira credentials not found. Please use the Setup page.")
        return

    try:
        service = build_service(creds.server, creds.email, creds.token, load_anthropic_key(secrets))
        st.session_state["jira_server"] = creds.server
        st.session_state["jira_email"] = creds.email
        st.session_state["standup_service"] = service
        st.sidebar.success("Jira connection ready.")
    except Exception as e:
        st.sidebar.error(f"Jira connection failed: {e}")
        st.session_state.pop("standup_service", None)


PAGES_DIR = Path(__file__).parent / "standup_app" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"standup_app.pages.{py.stem}"
    try:
        import_module(mod_name)
    except Exception:
        logging.getLogger(__name__).exception("Failed importing page %s", mod_name)

_auto_init_standup_service()

if __name__ == "__main__":
    main()
