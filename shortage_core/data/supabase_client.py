# =============================================================================
# shortage_core/data/supabase_client.py
# Supabase Client Configuration for the Shortage Log
# =============================================================================

from __future__ import annotations
from typing import Optional

import streamlit as st
from supabase import Client, create_client

from shortage_core.config import Settings, load_settings
from shortage_core.errors import ConfigurationError
from shortage_core.logging import get_logger

logger = get_logger(__name__)


def get_supabase_client(settings: Optional[Settings] = None) -> Optional[Client]:
    """
    Initialize and return a Supabase client.

    Credentials come from .streamlit/secrets.toml ([supabase] url/key) or the
    SUPABASE_URL / SUPABASE_KEY environment variables.

    Returns:
        Supabase client instance or None if not configured
    """
    settings = settings or load_settings()
    try:
        settings.require_remote()
    except ConfigurationError as e:
        logger.warning(f"Supabase disabled, reports will be kept locally: {e.message}")
        return None

    try:
        client: Client = create_client(settings.supabase_url, settings.supabase_key)
        return client
    except Exception as e:
        logger.error(f"Failed to initialize Supabase client: {e}")
        return None


@st.cache_resource
def get_cached_supabase_client() -> Optional[Client]:
    """
    Get cached Supabase client (reused across sessions).

    No TTL: the report gateway and sync engine hold on to this instance for
    the life of the process.
    """
    return get_supabase_client()
