# =============================================================================
# shortage_core/offline/sync_engine.py
# Delivers locally queued reports to Supabase
# =============================================================================
"""
SyncEngine - drains the local fallback queue into the remote report store.

Rules:
- Reports are delivered oldest first, at most BATCH_SIZE per run
- A queue entry is removed only after Supabase confirmed the insert
  (or the report is already present remotely)
- A failed insert records the attempt and error on the entry, leaves it
  queued and ends the run so delivery order is kept
- Runs on demand (sync_now), every SYNC_INTERVAL seconds on a daemon thread,
  and right after the connection manager reports the store is reachable again
"""

from __future__ import annotations
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional
import logging

from shortage_core.data.report_store import ReportStore
from shortage_core.models import Report
from shortage_core.offline.connection_manager import ConnectionManager, ConnectionState
from shortage_core.offline.fallback_store import LocalFallbackStore

logger = logging.getLogger(__name__)


@dataclass
class SyncState:
    is_syncing: bool = False
    last_run: Optional[datetime] = None
    last_success: Optional[datetime] = None
    failed_count: int = 0       # failures in the last run
    total_synced: int = 0       # since process start
    last_error: Optional[str] = None


class SyncEngine:
    """
    Usage:
        engine = SyncEngine(store, fallback, connection)
        engine.start()      # background thread
        engine.sync_now()   # e.g. from a "Sincronizar ahora" button
    """

    SYNC_INTERVAL = 30
    BATCH_SIZE = 50

    def __init__(
        self,
        store: ReportStore,
        fallback: LocalFallbackStore,
        connection: Optional[ConnectionManager] = None,
    ):
        self.store = store
        self.fallback = fallback
        self.connection = connection
        self.state = SyncState()
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._listeners: List[Callable[[SyncState], None]] = []

        if connection is not None:
            connection.register_callback(self._on_connection_change)

    @property
    def is_online(self) -> bool:
        # Without a connection manager every run simply attempts delivery
        return self.connection is None or self.connection.is_online

    # =========================================================================
    # BACKGROUND THREAD
    # =========================================================================

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run_forever, daemon=True, name="SyncEngine")
        self._thread.start()
        logger.info("Sync engine started")

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=10)
        logger.info("Sync engine stopped")

    def _run_forever(self) -> None:
        while not self._stop.wait(timeout=self.SYNC_INTERVAL):
            if self.connection is not None:
                self.connection.check_connection()
            if self.is_online:
                try:
                    self._drain()
                except Exception as e:
                    logger.error(f"Background sync failed: {e}")

    def _on_connection_change(self, state: ConnectionState) -> None:
        if self.is_online:
            logger.info("Supabase reachable again, syncing queued reports")
            self.sync_now()

    # =========================================================================
    # DELIVERY
    # =========================================================================

    def sync_now(self) -> bool:
        """
        Deliver one batch now.

        Returns:
            True if every attempted report reached Supabase (an empty queue
            counts as success); False when offline, busy or a delivery failed
        """
        if not self.is_online:
            logger.debug("Skipping sync: Supabase unreachable")
            return False
        return self._drain()

    def _drain(self) -> bool:
        if not self._lock.acquire(blocking=False):
            return False

        self.state.is_syncing = True
        self.state.last_run = datetime.now()
        self._notify()
        delivered = failed = 0
        try:
            for report in self.fallback.oldest(self.BATCH_SIZE):
                if not self._deliver(report):
                    failed = 1
                    break
                self.fallback.remove(report.id)
                delivered += 1

            if delivered or failed:
                logger.info(f"Sync run: {delivered} delivered, {failed} failed")
            if not failed:
                self.state.last_success = datetime.now()
            return not failed
        except Exception as e:
            logger.error(f"Sync run aborted: {e}")
            self.state.last_error = str(e)
            return False
        finally:
            self.state.total_synced += delivered
            self.state.failed_count = failed
            self.state.is_syncing = False
            self._lock.release()
            self._notify()

    def _deliver(self, report: Report) -> bool:
        try:
            self.store.insert(report)
            return True
        except Exception as insert_error:
            try:
                if self.store.exists(report.id):
                    # An earlier run inserted it but did not get to dequeue it
                    return True
            except Exception as e:
                logger.debug(f"Existence check for {report.id} failed: {e}")

            logger.warning(f"Could not deliver report {report.id}: {insert_error}")
            self.state.last_error = str(insert_error)
            self.fallback.record_failure(report.id, str(insert_error))
            return False

    # =========================================================================
    # LISTENERS
    # =========================================================================

    def register_callback(self, callback: Callable[[SyncState], None]) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            try:
                callback(self.state)
            except Exception as e:
                logger.error(f"Sync listener failed: {e}")
