# =============================================================================
# shortage_core/offline/connection_manager.py
# Supabase reachability tracking
# =============================================================================
"""
ConnectionManager - answers "can we reach Supabase right now?"

The check is a plain TCP connect to the Supabase host; it says nothing about
credentials or table permissions, only that a write is worth attempting.
Listeners are told when the status flips (the sync engine uses this to drain
the local queue as soon as the network is back).
"""

from __future__ import annotations
import socket
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Tuple
from urllib.parse import urlparse
import logging

logger = logging.getLogger(__name__)


class ConnectionStatus(Enum):
    ONLINE = "online"
    OFFLINE = "offline"       # unreachable, or Supabase not configured
    UNKNOWN = "unknown"       # never checked


@dataclass
class ConnectionState:
    status: ConnectionStatus = ConnectionStatus.UNKNOWN
    last_check: Optional[datetime] = None
    last_online: Optional[datetime] = None
    consecutive_failures: int = 0
    error_message: Optional[str] = None


def supabase_address(url: Optional[str]) -> Optional[Tuple[str, int]]:
    """(host, port) for a Supabase project URL, or None if it has no host."""
    if not url:
        return None
    parsed = urlparse(url)
    if not parsed.hostname:
        return None
    return parsed.hostname, parsed.port or (80 if parsed.scheme == "http" else 443)


class ConnectionManager:
    """
    Usage:
        manager = ConnectionManager(settings.supabase_url)
        manager.register_callback(on_change)
        manager.check_connection()
    """

    CONNECTION_TIMEOUT = 5  # seconds

    def __init__(self, supabase_url: Optional[str] = None):
        self.supabase_url = supabase_url
        self._state = ConnectionState()
        self._callbacks: List[Callable[[ConnectionState], None]] = []

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_online(self) -> bool:
        return self._state.status is ConnectionStatus.ONLINE

    def _probe(self) -> Optional[str]:
        """None when the host accepts a TCP connection, else the reason it did not."""
        address = supabase_address(self.supabase_url)
        if address is None:
            return "Supabase is not configured" if not self.supabase_url else f"Invalid Supabase URL: {self.supabase_url}"
        try:
            with socket.create_connection(address, timeout=self.CONNECTION_TIMEOUT):
                return None
        except OSError as e:
            return str(e)

    def check_connection(self) -> ConnectionState:
        previous = self._state.status
        error = self._probe()
        now = datetime.now()

        self._state.last_check = now
        self._state.error_message = error
        if error is None:
            self._state.status = ConnectionStatus.ONLINE
            self._state.last_online = now
            self._state.consecutive_failures = 0
        else:
            self._state.status = ConnectionStatus.OFFLINE
            self._state.consecutive_failures += 1
            logger.debug(f"Supabase unreachable: {error}")

        if previous is not self._state.status:
            logger.info(f"Connection status: {previous.value} -> {self._state.status.value}")
            for callback in list(self._callbacks):
                try:
                    callback(self._state)
                except Exception as e:
                    logger.error(f"Connection callback failed: {e}")

        return self._state

    def register_callback(self, callback: Callable[[ConnectionState], None]) -> None:
        if callback not in self._callbacks:
            self._callbacks.append(callback)
