# =============================================================================
# shortage_core/offline/session_memory.py
# Remembers the last physician name for the current day
# =============================================================================

from __future__ import annotations
from datetime import date
from typing import Callable, Optional
import logging

from shortage_core.models import PhysicianSession
from shortage_core.offline.local_database import LocalDatabase

logger = logging.getLogger(__name__)

PHYSICIAN_KEY = "current_physician"


class PhysicianSessionMemory:
    """
    Form-prefill convenience: the name is only returned on the calendar day it
    was stored. Stale entries are ignored rather than deleted.
    """

    def __init__(self, db: LocalDatabase, today: Callable[[], date] = date.today):
        self.db = db
        self._today = today

    def remember(self, name: str) -> None:
        name = (name or "").strip()
        if not name:
            return
        session = PhysicianSession(name=name, date=self._today().isoformat())
        self.db.set_setting(PHYSICIAN_KEY, session.to_dict())

    def recall(self) -> Optional[str]:
        data = self.db.get_setting(PHYSICIAN_KEY)
        if not isinstance(data, dict):
            return None
        try:
            session = PhysicianSession(name=data["name"], date=data["date"])
        except (KeyError, TypeError):
            logger.debug("Ignoring malformed physician session record")
            return None

        if not session.is_valid_on(self._today()):
            return None
        return session.name
