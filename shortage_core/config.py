# =============================================================================
# shortage_core/config.py
# Application Settings (Streamlit secrets -> environment -> defaults)
# =============================================================================
"""
Settings loader for the Shortage Log.

Expected secrets in .streamlit/secrets.toml:

    [supabase]
    url = "https://your-project.supabase.co"
    key = "your-anon-key"

    [app]
    admin_key = "shared-admin-key"
    hospital_name = "Centenario Hospital Miguel Hidalgo"
    local_db = "local_data/shortage_log.db"

Environment variables SUPABASE_URL, SUPABASE_KEY, SHORTAGE_ADMIN_KEY,
SHORTAGE_HOSPITAL_NAME and SHORTAGE_LOCAL_DB are used when a secret is absent.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import streamlit as st

from shortage_core.errors import ConfigurationError
from shortage_core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_LOCAL_DB = Path(__file__).parent.parent / "local_data" / "shortage_log.db"
DEFAULT_HOSPITAL_NAME = "Centenario Hospital Miguel Hidalgo"
REPORTS_TABLE = "reports"


@dataclass(frozen=True)
class Settings:
    """Resolved application settings."""
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    admin_key: Optional[str] = None
    hospital_name: str = DEFAULT_HOSPITAL_NAME
    local_db_path: Path = DEFAULT_LOCAL_DB
    reports_table: str = REPORTS_TABLE

    @property
    def is_remote_configured(self) -> bool:
        """True when both Supabase URL and key are available."""
        return bool(self.supabase_url and self.supabase_key)

    def require_remote(self) -> None:
        """Raise ConfigurationError if Supabase credentials are missing."""
        if not self.supabase_url:
            raise ConfigurationError("Supabase URL is not configured", config_key="supabase.url")
        if not self.supabase_key:
            raise ConfigurationError("Supabase key is not configured", config_key="supabase.key")


def _secrets_section(name: str) -> Dict[str, Any]:
    """Read a secrets.toml section, returning {} when secrets are unavailable."""
    try:
        if name in st.secrets:
            return dict(st.secrets[name])
    except Exception as e:
        # No secrets.toml present (tests, CLI usage)
        logger.debug(f"Streamlit secrets unavailable for [{name}]: {e}")
    return {}


def load_settings() -> Settings:
    """
    Resolve settings from Streamlit secrets, then environment variables.

    Returns:
        Settings instance
    """
    supabase = _secrets_section("supabase")
    app = _secrets_section("app")

    local_db = app.get("local_db") or os.getenv("SHORTAGE_LOCAL_DB")

    settings = Settings(
        supabase_url=supabase.get("url") or os.getenv("SUPABASE_URL"),
        supabase_key=supabase.get("key") or os.getenv("SUPABASE_KEY"),
        admin_key=app.get("admin_key") or os.getenv("SHORTAGE_ADMIN_KEY"),
        hospital_name=app.get("hospital_name") or os.getenv("SHORTAGE_HOSPITAL_NAME") or DEFAULT_HOSPITAL_NAME,
        local_db_path=Path(local_db) if local_db else DEFAULT_LOCAL_DB,
    )

    if not settings.is_remote_configured:
        logger.warning("Supabase credentials not found; reports will be kept locally only")

    return settings
