# =============================================================================
# shortage_core/data/report_store.py
# Remote Report Store backed by the Supabase `reports` table
# =============================================================================
"""
Remote storage for shortage reports.

Table: reports

Schema:
    - id: text (client-generated, primary key)
    - physician_name: text
    - service: text
    - date: text (display date, es-MX)
    - timestamp: bigint (epoch milliseconds)
    - items: text (JSON-encoded list of items)

Every method raises RemoteUnavailableError when the call fails; callers
decide how to degrade.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from shortage_core.config import REPORTS_TABLE
from shortage_core.errors import RemoteUnavailableError, ReportValidationError
from shortage_core.logging import get_logger
from shortage_core.models import Report

logger = get_logger(__name__)


class ReportStore(ABC):
    """Insert / list / delete contract for the remote report collection."""

    @abstractmethod
    def insert(self, report: Report) -> None:
        ...

    @abstractmethod
    def list_reports(self) -> List[Report]:
        """All reports, newest timestamp first."""

    @abstractmethod
    def delete(self, report_id: str) -> int:
        """Delete by id; returns the number of rows removed."""

    @abstractmethod
    def exists(self, report_id: str) -> bool:
        ...


class SupabaseReportStore(ReportStore):
    """
    ReportStore over a supabase-py client.

    Usage:
        store = SupabaseReportStore(get_cached_supabase_client())
        store.insert(report)
        reports = store.list_reports()
    """

    BATCH_SIZE = 1000  # Supabase default row limit per request

    def __init__(self, client: Any, table_name: str = REPORTS_TABLE):
        self.client = client
        self.table_name = table_name

    def _fail(self, operation: str, error: Exception) -> RemoteUnavailableError:
        logger.error(f"Supabase {operation} on {self.table_name} failed: {error}")
        return RemoteUnavailableError(
            f"Supabase {operation} failed: {error}",
            operation=operation,
            table=self.table_name,
        )

    def insert(self, report: Report) -> None:
        try:
            self.client.table(self.table_name).insert(report.to_row()).execute()
        except Exception as e:
            raise self._fail("insert", e) from e

    def list_reports(self) -> List[Report]:
        """
        Fetch ALL reports ordered by timestamp descending (handles the
        Supabase 1000 row limit with range pagination).
        """
        try:
            all_rows = []
            offset = 0

            while True:
                response = (
                    self.client.table(self.table_name)
                    .select("*")
                    .order("timestamp", desc=True)
                    .range(offset, offset + self.BATCH_SIZE - 1)
                    .execute()
                )

                if not response.data:
                    break

                all_rows.extend(response.data)

                # If we got fewer than batch_size, we've reached the end
                if len(response.data) < self.BATCH_SIZE:
                    break
                offset += self.BATCH_SIZE

        except Exception as e:
            raise self._fail("select", e) from e

        reports = []
        for row in all_rows:
            try:
                reports.append(Report.from_row(row))
            except ReportValidationError as e:
                logger.warning(f"Skipping malformed report row {row.get('id')}: {e}")
        return reports

    def delete(self, report_id: str) -> int:
        try:
            response = self.client.table(self.table_name).delete().eq("id", report_id).execute()
        except Exception as e:
            raise self._fail("delete", e) from e
        return len(response.data or [])

    def exists(self, report_id: str) -> bool:
        try:
            response = (
                self.client.table(self.table_name)
                .select("id")
                .eq("id", report_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise self._fail("select", e) from e
        return bool(response.data)


class UnavailableReportStore(ReportStore):
    """Stand-in used when Supabase is not configured: every call fails."""

    def __init__(self, reason: str = "Supabase is not configured"):
        self.reason = reason

    def _raise(self, operation: str):
        raise RemoteUnavailableError(self.reason, operation=operation)

    def insert(self, report: Report) -> None:
        self._raise("insert")

    def list_reports(self) -> List[Report]:
        self._raise("select")

    def delete(self, report_id: str) -> int:
        self._raise("delete")

    def exists(self, report_id: str) -> bool:
        self._raise("select")


def build_report_store(client: Optional[Any], table_name: str = REPORTS_TABLE) -> ReportStore:
    """Supabase-backed store when a client is available, otherwise a failing stand-in."""
    if client is None:
        return UnavailableReportStore()
    return SupabaseReportStore(client, table_name)
