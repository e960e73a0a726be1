# =============================================================================
# shortage_core/errors/exceptions.py
# Custom Exception Hierarchy for the Shortage Log
# =============================================================================

from typing import Any, Dict, Optional


class ShortageLogError(Exception):
    """
    Base exception for all Shortage Log errors.

    Subclasses set ``default_code``; keyword context passed to a subclass
    (field, report_id, operation, ...) lands in ``details`` when not None.

    Attributes:
        message: Human-readable description
        code: Machine-readable code, e.g. "VALIDATION_001"
        details: Extra context for logs and the debug expander
        recoverable: False when the app cannot work around the problem
    """

    default_code = "SL_000"
    default_recoverable = True

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        recoverable: Optional[bool] = None,
        **context: Any,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = dict(details or {})
        self.details.update({k: v for k, v in context.items() if v is not None})
        self.recoverable = self.default_recoverable if recoverable is None else recoverable

    def __str__(self) -> str:
        if not self.details:
            return f"[{self.code}] {self.message}"
        return f"[{self.code}] {self.message} | Details: {self.details}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


class ReportValidationError(ShortageLogError):
    """A report or item is missing required data; nothing was persisted.

    Context: field, value
    """
    default_code = "VALIDATION_001"


class ReportNotFoundError(ShortageLogError):
    """Delete targeted an id the remote store does not have.

    Context: report_id
    """
    default_code = "NOT_FOUND_001"


class RemoteUnavailableError(ShortageLogError):
    """Supabase could not be reached or rejected the call.

    Context: operation, table
    """
    default_code = "REMOTE_001"


class LocalStoreError(ShortageLogError):
    """The on-device SQLite store failed.

    Context: db_path
    """
    default_code = "LOCAL_001"


class ConfigurationError(ShortageLogError):
    """Settings are missing or invalid.

    Context: config_key, expected_type
    """
    default_code = "CONFIG_001"
    default_recoverable = False
