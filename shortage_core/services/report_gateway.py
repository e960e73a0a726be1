# =============================================================================
# shortage_core/services/report_gateway.py
# Synchronization Gateway - the only reader/writer of report storage
# =============================================================================
"""
ReportGateway - single API the UI uses to persist and read reports.

- submit(): one attempt at Supabase, falling back to the local queue
- list():   all remote reports, newest first; [] when Supabase is unreachable
- remove(): delete by id on Supabase; False when nothing was deleted

None of these raise; failures are logged and returned as values so the
form can always tell the user where the report ended up.

Usage:
------
from shortage_core.services import get_report_gateway

gateway = get_report_gateway()
outcome = gateway.submit(report)
if outcome is SubmitOutcome.LOCAL_FALLBACK:
    st.warning("Guardado localmente")
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List

from shortage_core.data.report_store import ReportStore, UnavailableReportStore
from shortage_core.errors import ReportNotFoundError, ShortageLogError
from shortage_core.models import Report
from shortage_core.offline.fallback_store import LocalFallbackStore

from .base_service import BaseService


class SubmitOutcome(Enum):
    """Where a submitted report ended up."""
    REMOTE = "remote"
    LOCAL_FALLBACK = "local_fallback"
    FAILED = "failed"  # neither Supabase nor the local queue accepted it


class ReportGateway(BaseService):
    """
    Orchestrates report writes/reads against the remote store with a local
    fallback queue for writes.
    """

    def __init__(self, store: ReportStore, fallback: LocalFallbackStore):
        super().__init__()
        self.store = store
        self.fallback = fallback

    def submit(self, report: Report) -> SubmitOutcome:
        """Persist a report remotely, or queue it locally if that fails."""
        try:
            with self.log_operation(f"Saving report {report.id}"):
                self.store.insert(report)
            return SubmitOutcome.REMOTE
        except Exception as e:
            code = e.code if isinstance(e, ShortageLogError) else "UNKNOWN"
            self.logger.warning(f"[{code}] Remote save failed, using local backup: {e}")

        try:
            self.fallback.enqueue(report)
            return SubmitOutcome.LOCAL_FALLBACK
        except Exception as e:
            self.logger.error(f"Report {report.id} could not be queued locally: {e}", exc_info=True)
            return SubmitOutcome.FAILED

    def list(self) -> List[Report]:
        """All remote reports ordered by timestamp, most recent first."""
        try:
            with self.log_operation("Loading reports"):
                reports = self.store.list_reports()
        except Exception as e:
            self.logger.error(f"Error loading reports from the cloud: {e}")
            return []
        return sorted(reports, key=lambda r: r.timestamp, reverse=True)

    def remove(self, report_id: str) -> bool:
        """Delete a report from the remote store. Local queue is untouched."""
        try:
            deleted = self.store.delete(report_id)
        except Exception as e:
            self.logger.error(f"Error deleting report {report_id}: {e}")
            return False

        if deleted == 0:
            not_found = ReportNotFoundError("Report not found", report_id=report_id)
            self.logger.warning(str(not_found))
            return False

        self.logger.info(f"Deleted report {report_id}")
        return True

    # =========================================================================
    # LOCAL QUEUE VISIBILITY
    # =========================================================================

    def pending(self) -> List[Report]:
        """Reports waiting in the local queue, most recent first."""
        try:
            return self.fallback.reports()
        except Exception as e:
            self.logger.error(f"Error reading local queue: {e}")
            return []

    @property
    def pending_count(self) -> int:
        try:
            return self.fallback.count()
        except Exception as e:
            self.logger.error(f"Error counting local queue: {e}")
            return 0

    def status(self) -> Dict[str, Any]:
        """Status information for UI display."""
        return {
            "store": type(self.store).__name__,
            "remote_configured": not isinstance(self.store, UnavailableReportStore),
            "pending_count": self.pending_count,
        }
