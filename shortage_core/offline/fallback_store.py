# =============================================================================
# shortage_core/offline/fallback_store.py
# Durable on-device queue of reports that failed to reach Supabase
# =============================================================================

from __future__ import annotations
from typing import List, Optional
import logging

from shortage_core.errors import ReportValidationError
from shortage_core.models import Report
from shortage_core.offline.local_database import LocalDatabase

logger = logging.getLogger(__name__)

FALLBACK_NAMESPACE = "backup_reports"


class LocalFallbackStore:
    """
    Most-recent-first queue of unsynced reports.

    Position 0 is always the last report enqueued. Entries survive process
    restarts and are removed only by the sync engine (after a confirmed
    remote commit) or by an explicit clear.
    """

    def __init__(self, db: LocalDatabase, namespace: str = FALLBACK_NAMESPACE):
        self.db = db
        self.namespace = namespace

    def enqueue(self, report: Report) -> None:
        self.db.queue_push(self.namespace, report.id, report.to_dict())
        logger.info(f"Report {report.id} queued locally ({self.count()} pending)")

    def _decode(self, entries) -> List[Report]:
        reports = []
        for entry in entries:
            try:
                reports.append(Report.from_row(entry["data"]))
            except ReportValidationError as e:
                logger.error(f"Skipping unreadable queued report {entry['key']}: {e}")
        return reports

    def reports(self) -> List[Report]:
        """Queued reports, most recent first."""
        return self._decode(self.db.queue_items(self.namespace, newest_first=True))

    def oldest(self, limit: int) -> List[Report]:
        """Up to ``limit`` queued reports, oldest first (delivery order)."""
        return self._decode(self.db.queue_items(self.namespace, newest_first=False, limit=limit))

    def entries(self) -> List[dict]:
        """Raw queue entries including attempt counters, most recent first."""
        return self.db.queue_items(self.namespace, newest_first=True)

    def get(self, report_id: str) -> Optional[Report]:
        for report in self.reports():
            if report.id == report_id:
                return report
        return None

    def remove(self, report_id: str) -> bool:
        return self.db.queue_remove(self.namespace, report_id)

    def clear(self) -> int:
        removed = self.db.queue_clear(self.namespace)
        logger.info(f"Cleared {removed} queued reports")
        return removed

    def count(self) -> int:
        return self.db.queue_count(self.namespace)

    def record_failure(self, report_id: str, error: str) -> None:
        self.db.queue_mark_failed(self.namespace, report_id, error)
