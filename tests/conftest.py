# =============================================================================
# tests/conftest.py
# Pytest Configuration and Fixtures
# =============================================================================

import pytest
from datetime import datetime
from typing import Dict, List
from unittest.mock import MagicMock

from shortage_core.data.report_store import ReportStore


# =============================================================================
# FAKES
# =============================================================================

class FakeReportStore(ReportStore):
    """
    In-memory ReportStore. Set ``fail = True`` to simulate an unreachable
    Supabase for every operation.
    """

    def __init__(self):
        self.rows: Dict[str, dict] = {}
        self.fail = False
        self.insert_calls = 0

    def _check(self, operation: str):
        if self.fail:
            from shortage_core.errors import RemoteUnavailableError
            raise RemoteUnavailableError("Supabase unreachable", operation=operation, table="reports")

    def insert(self, report):
        self.insert_calls += 1
        self._check("insert")
        self.rows[report.id] = report.to_row()

    def list_reports(self) -> List:
        from shortage_core.models import Report
        self._check("select")
        return [Report.from_row(row) for row in self.rows.values()]

    def delete(self, report_id: str) -> int:
        self._check("delete")
        return 1 if self.rows.pop(report_id, None) is not None else 0

    def exists(self, report_id: str) -> bool:
        self._check("select")
        return report_id in self.rows


class SessionState(dict):
    """dict with attribute access, like st.session_state."""

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __setattr__(self, name, value):
        self[name] = value


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def catalog():
    """Bundled item catalog"""
    from shortage_core.catalog import ItemCatalog
    return ItemCatalog.from_csv()


@pytest.fixture
def paracetamol(catalog):
    """Catalog item M001 (PARACETAMOL oral solution)"""
    return catalog.by_code("M001")


@pytest.fixture
def fixed_now():
    return datetime(2026, 3, 5, 9, 30, 0)


@pytest.fixture
def make_report(catalog, fixed_now):
    """Factory for valid reports"""
    from shortage_core.models import Report

    def _make(physician="Dra. Lopez", service="Pediatría", codes=("M001",), now=None):
        items = [catalog.by_code(code) for code in codes]
        return Report.create(physician, service, items, now=now or fixed_now)

    return _make


@pytest.fixture
def sample_reports(make_report):
    """Three reports across services, oldest first"""
    return [
        make_report("Dr. Ruiz", "Urgencias Pediátricas", ("I001",), now=datetime(2026, 3, 3, 8, 0)),
        make_report("Dra. Lopez", "Pediatría", ("M001", "M002"), now=datetime(2026, 3, 4, 8, 0)),
        make_report("Dr. Vega", "Neonatología", ("M003",), now=datetime(2026, 3, 5, 8, 0)),
    ]


# =============================================================================
# STORAGE FIXTURES
# =============================================================================

@pytest.fixture
def local_db(tmp_path):
    """Fresh SQLite database per test"""
    from shortage_core.offline.local_database import LocalDatabase

    db = LocalDatabase(tmp_path / "shortage_log_test.db")
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def fallback(local_db):
    from shortage_core.offline import LocalFallbackStore
    return LocalFallbackStore(local_db)


@pytest.fixture
def fake_store():
    return FakeReportStore()


@pytest.fixture
def gateway(fake_store, fallback):
    from shortage_core.services import ReportGateway
    return ReportGateway(fake_store, fallback)


# =============================================================================
# MOCK FIXTURES
# =============================================================================

@pytest.fixture
def mock_session_state(monkeypatch):
    """Replace st.session_state for modules that read it at call time"""
    import streamlit as st

    state = SessionState()
    monkeypatch.setattr(st, "session_state", state)
    return state


@pytest.fixture
def mock_supabase():
    """Mock Supabase client"""
    mock_client = MagicMock()
    table = mock_client.table.return_value
    table.select.return_value.order.return_value.range.return_value.execute.return_value.data = []
    table.insert.return_value.execute.return_value = MagicMock(data=[{}])
    table.delete.return_value.eq.return_value.execute.return_value.data = []
    table.select.return_value.eq.return_value.limit.return_value.execute.return_value.data = []
    return mock_client
