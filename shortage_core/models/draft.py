# =============================================================================
# shortage_core/models/draft.py
# In-progress item selection for the report form
# =============================================================================

from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from .report import MedicalItem, Report


class ReportDraft:
    """
    Ordered, de-duplicated selection of items being composed into a report.

    Usage:
        draft = ReportDraft()
        draft.toggle(item)          # add
        draft.toggle(item)          # remove again
        report = draft.build("Dra. Lopez", "Pediatría")
    """

    def __init__(self, items: Optional[List[MedicalItem]] = None):
        self._items: List[MedicalItem] = []
        for item in items or []:
            self.add(item)

    @property
    def items(self) -> List[MedicalItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: MedicalItem) -> bool:
        return any(i.id == item.id for i in self._items)

    def add(self, item: MedicalItem) -> bool:
        """Append an item unless one with the same id is already selected."""
        if item in self:
            return False
        self._items.append(item)
        return True

    def remove(self, item_id: str) -> bool:
        before = len(self._items)
        self._items = [i for i in self._items if i.id != item_id]
        return len(self._items) < before

    def toggle(self, item: MedicalItem) -> bool:
        """Add the item if absent, remove it if present. Returns True if now selected."""
        if item in self:
            self.remove(item.id)
            return False
        self._items.append(item)
        return True

    def clear(self) -> None:
        self._items = []

    def build(self, physician_name: str, service: str, now: Optional[datetime] = None) -> Report:
        """Create a validated Report from the current selection."""
        return Report.create(physician_name, service, self._items, now=now)
