# =============================================================================
# shortage_core/errors/__init__.py
# Centralized Error Handling for the Shortage Log
# =============================================================================

from .exceptions import (
    ShortageLogError,
    ReportValidationError,
    ReportNotFoundError,
    RemoteUnavailableError,
    LocalStoreError,
    ConfigurationError,
)

from .handlers import (
    handle_error,
    safe_execute,
    ErrorContext,
)

__all__ = [
    # Exceptions
    "ShortageLogError",
    "ReportValidationError",
    "ReportNotFoundError",
    "RemoteUnavailableError",
    "LocalStoreError",
    "ConfigurationError",
    # Handlers
    "handle_error",
    "safe_execute",
    "ErrorContext",
]
