import streamlit as st

from shortage_core.models import ReportDraft

# Central registry for session-state keys used across the app.
SESSION_DEFAULTS = {
    "physician_name": "",
    "service": "",
    "search_term": "",
    "show_custom_input": False,
    "history_search": "",
    "history_reports": None,
    "debug_mode": False,
}


def init_state(physician_name: str = ""):
    """Initialize session state with defaults (and a fresh item draft)."""
    for k, v in SESSION_DEFAULTS.items():
        if k not in st.session_state:
            st.session_state[k] = v

    if "draft" not in st.session_state:
        st.session_state["draft"] = ReportDraft()

    if physician_name and not st.session_state["physician_name"]:
        st.session_state["physician_name"] = physician_name


def get_draft() -> ReportDraft:
    if "draft" not in st.session_state:
        st.session_state["draft"] = ReportDraft()
    return st.session_state["draft"]


def reset_form():
    """Clear the item selection and search box after a saved report."""
    get_draft().clear()
    st.session_state["search_term"] = ""
    st.session_state["show_custom_input"] = False
