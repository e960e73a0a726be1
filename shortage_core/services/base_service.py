# =============================================================================
# shortage_core/services/base_service.py
# Shared result type and logging base for report services
# =============================================================================

from __future__ import annotations
from abc import ABC
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from shortage_core.errors import ShortageLogError, handle_error
from shortage_core.logging import LogContext, get_logger


@dataclass
class ServiceResult:
    """
    Outcome of a service call that the UI renders instead of catching.

    ``error_code`` mirrors ShortageLogError.code ("EXCEPTION" for anything
    else) and ``recoverable`` tells the page whether retrying makes sense.
    """
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    recoverable: bool = True
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, data: Any = None, **metadata) -> ServiceResult:
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(cls, error: str, error_code: str = "EXCEPTION", recoverable: bool = True) -> ServiceResult:
        return cls(success=False, error=error, error_code=error_code, recoverable=recoverable)

    @classmethod
    def from_exception(cls, e: Exception) -> ServiceResult:
        if isinstance(e, ShortageLogError):
            result = cls.fail(e.message, e.code, e.recoverable)
            result.metadata = dict(e.details)
            return result
        return cls.fail(str(e))


class BaseService(ABC):
    """
    Base for the report services: a per-class logger and a wrapper that turns
    exceptions into ServiceResult values.

    Usage:
        class ExportService(BaseService):
            def build_workbook(self, reports) -> ServiceResult:
                return self.safe_execute("Exporting reports", to_excel_bytes, reports)
    """

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    def log_operation(self, operation: str) -> LogContext:
        """Timed log context, e.g. ``with self.log_operation("Loading reports"):``."""
        return LogContext(self.logger, operation)

    def safe_execute(self, operation: str, func: Callable[..., Any], *args, **kwargs) -> ServiceResult:
        """Run ``func`` inside a log context; never raises."""
        try:
            with self.log_operation(operation):
                return ServiceResult.ok(func(*args, **kwargs))
        except ShortageLogError as e:
            handle_error(e, show_user_message=False)
            return ServiceResult.from_exception(e)
        except Exception as e:
            return ServiceResult.fail(f"{operation} failed: {e}")
