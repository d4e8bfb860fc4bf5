"""
Centralized Logging Configuration
==================================
One package logger ("brewboard") owns the handlers; module loggers are
its children and propagate to it.

Design Decisions:
- Uses Python's built-in logging
- Console output is attached on first use; the dashboard adds a file
  handler through ``configure_logging`` once the config is known
- Timestamps and module names on every line

Usage:
    from brewboard.utils.logger import get_logger
    logger = get_logger(__name__)
    logger.info("Ledger loaded")
"""

import logging
import sys
import time
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "brewboard"

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_console_attached = False


def _package_logger() -> logging.Logger:
    global _console_attached
    root = logging.getLogger(PACKAGE_LOGGER)
    if not _console_attached:
        _console_attached = True
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(console_handler)
        root.setLevel(logging.INFO)
        root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a module of the package.

    Parameters
    ----------
    name : str
        Typically ``__name__``; names outside the package are nested
        under it so they share its handlers

    Returns
    -------
    logging.Logger

    Example
    -------
    >>> logger = get_logger(__name__)
    >>> logger.info("Seeding cost entries")
    2026-10-19 10:30:00 | INFO     | brewboard.services.finance | Seeding cost entries
    """
    _package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Set the package log level and optionally mirror output to a file.

    Safe to call on every Streamlit rerun: a file handler for the same
    path is only added once.
    """
    root = _package_logger()
    root.setLevel(level)
    for handler in root.handlers:
        handler.setLevel(level)

    if log_file:
        log_path = Path(log_file).resolve()
        already = any(
            isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_path
            for h in root.handlers
        )
        if not already:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding='utf-8')
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
            root.addHandler(file_handler)
    return root


def log_frame(logger: logging.Logger, label: str, df) -> None:
    """Debug-log the shape of a table built for a view"""
    logger.debug(f"{label}: {len(df):,} rows x {len(df.columns)} columns")


class LogContext:
    """
    Context manager timing an operation.

    Usage:
        with LogContext(logger, "Seeding COGS ledger"):
            # ... operation code ...
    """

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.INFO):
        self.logger = logger
        self.operation = operation
        self.level = level
        self._started = 0.0

    def __enter__(self):
        self._started = time.perf_counter()
        self.logger.log(self.level, f"{self.operation}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed_ms = (time.perf_counter() - self._started) * 1000
        if exc_type is None:
            self.logger.log(self.level, f"{self.operation} done in {elapsed_ms:.0f} ms")
        else:
            self.logger.error(f"{self.operation} failed after {elapsed_ms:.0f} ms: {exc_val}")
        return False
