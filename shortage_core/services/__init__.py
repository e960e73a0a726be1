# =============================================================================
# shortage_core/services/__init__.py
# Service Layer for the Shortage Log
# Separates business logic from UI presentation
# =============================================================================
"""
Service Layer

Usage Example:
-------------
    from shortage_core.services import get_report_gateway, get_catalog
    from shortage_core.models import ReportDraft

    catalog = get_catalog()
    draft = ReportDraft()
    draft.toggle(catalog.by_code("M001"))

    gateway = get_report_gateway()
    outcome = gateway.submit(draft.build("Dra. Lopez", "Pediatría"))

    reports = filter_reports("paracetamol", gateway.list())
    workbook = to_excel_bytes(reports)   # None when there is nothing to export
"""

from __future__ import annotations
from typing import Optional

from .base_service import BaseService, ServiceResult
from .search_service import search_items, filter_reports, SEARCH_RESULT_LIMIT
from .export_service import (
    ExportService,
    project,
    to_dataframe,
    to_excel_bytes,
    export_filename,
    EXPORT_COLUMNS,
)
from .report_gateway import ReportGateway, SubmitOutcome

__all__ = [
    # Base classes
    "BaseService",
    "ServiceResult",
    # Search
    "search_items",
    "filter_reports",
    "SEARCH_RESULT_LIMIT",
    # Export
    "ExportService",
    "project",
    "to_dataframe",
    "to_excel_bytes",
    "export_filename",
    "EXPORT_COLUMNS",
    # Gateway
    "ReportGateway",
    "SubmitOutcome",
    # Accessors
    "get_report_gateway",
    "get_session_memory",
    "get_sync_engine",
    "get_catalog",
]


# =============================================================================
# SINGLETON ACCESSORS
# =============================================================================

_gateway: Optional[ReportGateway] = None
_session_memory = None
_sync_engine = None
_catalog = None


def _build_store(settings):
    from shortage_core.data.report_store import build_report_store
    from shortage_core.data.supabase_client import get_cached_supabase_client
    return build_report_store(get_cached_supabase_client(), settings.reports_table)


def get_report_gateway() -> ReportGateway:
    """Get the global ReportGateway wired to Supabase and the local queue."""
    global _gateway
    if _gateway is None:
        from shortage_core.config import load_settings
        from shortage_core.offline import LocalFallbackStore, get_local_database

        settings = load_settings()
        db = get_local_database(settings.local_db_path)
        _gateway = ReportGateway(_build_store(settings), LocalFallbackStore(db))
    return _gateway


def get_session_memory():
    """Get the global PhysicianSessionMemory."""
    global _session_memory
    if _session_memory is None:
        from shortage_core.config import load_settings
        from shortage_core.offline import PhysicianSessionMemory, get_local_database

        settings = load_settings()
        _session_memory = PhysicianSessionMemory(get_local_database(settings.local_db_path))
    return _session_memory


def get_sync_engine(start: bool = True):
    """Get the global SyncEngine sharing the gateway's store and queue."""
    global _sync_engine
    if _sync_engine is None:
        from shortage_core.config import load_settings
        from shortage_core.offline import ConnectionManager, SyncEngine

        gateway = get_report_gateway()
        connection = ConnectionManager(load_settings().supabase_url)
        _sync_engine = SyncEngine(gateway.store, gateway.fallback, connection)
        # First check flips UNKNOWN -> ONLINE and drains anything left from earlier runs
        connection.check_connection()
        if start:
            _sync_engine.start()
    return _sync_engine


def get_catalog():
    """Get the global ItemCatalog."""
    global _catalog
    if _catalog is None:
        from shortage_core.catalog import ItemCatalog
        _catalog = ItemCatalog.from_csv()
    return _catalog
