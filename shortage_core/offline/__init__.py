# =============================================================================
# shortage_core/offline/__init__.py
# On-device storage and reconciliation
# =============================================================================
"""
Offline module

Keeps shortage reports from being lost when Supabase cannot be reached.

Architecture:
------------
                 ┌──────────────────────┐
                 │    ReportGateway     │  (services/report_gateway.py)
                 └──────────┬───────────┘
              insert ok     │     insert failed
          ┌─────────────────┴─────────────────┐
          ▼                                   ▼
   ┌────────────┐                    ┌──────────────────┐
   │  Supabase  │◄───── SyncEngine ──│ LocalFallbackStore│
   │  reports   │   (drains queue)   │  (SQLite queue)   │
   └────────────┘                    └──────────────────┘
          ▲
          │ reachability
   ┌──────────────────┐
   │ ConnectionManager│
   └──────────────────┘

PhysicianSessionMemory shares the same SQLite file (app_settings table).
"""

from shortage_core.offline.local_database import (
    LocalDatabase,
    get_local_database,
)

from shortage_core.offline.fallback_store import (
    LocalFallbackStore,
    FALLBACK_NAMESPACE,
)

from shortage_core.offline.session_memory import (
    PhysicianSessionMemory,
    PHYSICIAN_KEY,
)

from shortage_core.offline.connection_manager import (
    ConnectionManager,
    ConnectionState,
    ConnectionStatus,
)

from shortage_core.offline.sync_engine import (
    SyncEngine,
    SyncState,
)

__all__ = [
    # Local Database
    "LocalDatabase",
    "get_local_database",
    # Fallback queue
    "LocalFallbackStore",
    "FALLBACK_NAMESPACE",
    # Physician memory
    "PhysicianSessionMemory",
    "PHYSICIAN_KEY",
    # Connection Management
    "ConnectionManager",
    "ConnectionState",
    "ConnectionStatus",
    # Sync Engine
    "SyncEngine",
    "SyncState",
]
