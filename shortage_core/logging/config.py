# =============================================================================
# shortage_core/logging/config.py
# Logging Configuration for the Shortage Log
# =============================================================================

import logging
import os
import sys
import time
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_DIR = Path("logs")
LOG_FILENAME = "shortage_log.log"
LOG_BACKUP_DAYS = 30

# Chatty HTTP/Supabase client loggers
QUIET_LOGGERS = ("urllib3", "httpx", "httpcore", "hpack", "supabase", "postgrest")

_configured = False


def setup_logging(
    level: Optional[int] = None,
    log_to_file: bool = True,
    log_dir: Optional[Path] = None,
) -> None:
    """
    Configure logging once per process; later calls are no-ops.

    Args:
        level: Root level; defaults to SHORTAGE_LOG_LEVEL or INFO
        log_to_file: Also write to logs/shortage_log.log, rotated at midnight
        log_dir: Directory for the log file (default: ./logs)
    """
    global _configured
    if _configured:
        return

    if level is None:
        level = logging.getLevelName(os.getenv("SHORTAGE_LOG_LEVEL", "INFO").upper())
        if not isinstance(level, int):
            level = logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_to_file:
        directory = log_dir or LOG_DIR
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(TimedRotatingFileHandler(
            directory / LOG_FILENAME,
            when="midnight",
            backupCount=LOG_BACKUP_DAYS,
            encoding="utf-8",
        ))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
    logging.getLogger("shortage_core").info("Logging initialized")


def get_logger(name: str) -> logging.Logger:
    """
    Usage:
        logger = get_logger(__name__)
        logger.info("Report queued locally")
    """
    return logging.getLogger(name)


class LogContext:
    """
    Times a unit of work. Failures are logged as warnings without a
    traceback; the caller decides how loud the error really is.

        with LogContext(logger, "Loading reports"):
            store.list_reports()
    """

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self._started = 0.0

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self._started

    def __enter__(self):
        self._started = time.perf_counter()
        self.logger.debug(f"{self.operation}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.info(f"{self.operation} done in {self.elapsed:.2f}s")
        else:
            self.logger.warning(f"{self.operation} failed after {self.elapsed:.2f}s: {exc_val}")
        return False
