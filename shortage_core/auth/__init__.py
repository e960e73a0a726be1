"""
Admin gate for the history page.

⚠️ The gate is a single shared key kept in secrets; it keeps casual users
out of the history view and is NOT a security boundary.
"""

from .authentication import (
    verify_admin_key,
    check_admin_access,
    logout_admin,
    initialize_session_state,
    require_admin_access,
)

__all__ = [
    "verify_admin_key",
    "check_admin_access",
    "logout_admin",
    "initialize_session_state",
    "require_admin_access",
]
