"""
Admin access for the Shortage Log history page.

⚠️ SHARED KEY ONLY
Everyone with access to the history uses the same key, configured as
[app] admin_key in .streamlit/secrets.toml or SHORTAGE_ADMIN_KEY. The check
runs inside the Streamlit session and provides NO real security.
"""

import hmac
from typing import Optional

import streamlit as st

from shortage_core.config import load_settings
from shortage_core.logging import get_logger

logger = get_logger(__name__)


def initialize_session_state():
    """
    Initialize session state variables for the admin gate.
    Call this at the start of every page.
    """
    if "admin_authenticated" not in st.session_state:
        st.session_state.admin_authenticated = False


def verify_admin_key(candidate: str, expected: Optional[str] = None) -> bool:
    """
    Compare a typed key against the configured admin key.

    Args:
        candidate: Key entered by the user
        expected: Key to compare against (defaults to settings.admin_key)

    Returns:
        bool: True if the key matches; also marks the session as admin
    """
    expected = expected if expected is not None else load_settings().admin_key
    if not expected:
        logger.warning("Admin key is not configured; history access denied")
        return False

    ok = hmac.compare_digest((candidate or "").encode("utf-8"), expected.encode("utf-8"))
    if ok:
        st.session_state.admin_authenticated = True
    else:
        logger.info("Rejected admin key attempt")
    return ok


def check_admin_access() -> bool:
    """
    Check if the current session has unlocked the history page.

    Returns:
        bool: True if the admin key was accepted in this session
    """
    return bool(st.session_state.get("admin_authenticated", False))


def logout_admin():
    """Lock the history page again for this session."""
    if "admin_authenticated" in st.session_state:
        st.session_state.admin_authenticated = False


def require_admin_access():
    """
    Gate a page behind the shared admin key.

    Renders the key form and stops the script until the key is accepted.
    """
    initialize_session_state()
    if check_admin_access():
        return

    st.subheader("🔒 Acceso Restringido")
    with st.form("admin_key_form"):
        candidate = st.text_input("Clave de administrador", type="password")
        submitted = st.form_submit_button("Entrar", use_container_width=True)

    if submitted:
        if verify_admin_key(candidate):
            st.rerun()
        st.error("Clave incorrecta")

    st.stop()
