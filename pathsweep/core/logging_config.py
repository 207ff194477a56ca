"""Logging configuration for pathsweep."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .constants import (
    LOGS_DIR,
    DEBUG_LOG_FILE,
    AUDIT_LOG_FILE,
    DEBUG_LOG_MAX_BYTES,
    DEBUG_LOG_BACKUP_COUNT,
)

# Logger names
AUDIT_LOGGER_NAME = "audit"

# Format strings
DEBUG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"
AUDIT_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def _ensure_log_directory() -> None:
    """Create log directory if it doesn't exist."""
    LOGS_DIR.mkdir(parents=True, exist_ok=True)


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, fmt: str) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def setup_logging(debug_mode: bool = False) -> None:
    """
    Configure logging for a command-line run.

    Diagnostics from every module go to the root logger, which writes them
    to the rotating debug log under LOGS_DIR (always at DEBUG) and to
    stderr (INFO, or DEBUG in debug mode), leaving stdout to command output
    such as ``pathsweep locate``. Sweep summaries go to the separate
    ``audit`` logger, which appends to the audit log only.

    Calling it again replaces the handlers instead of adding more.

    Args:
        debug_mode: If True, also output DEBUG to the console
    """
    _ensure_log_directory()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    _attach(
        root_logger,
        RotatingFileHandler(
            DEBUG_LOG_FILE,
            maxBytes=DEBUG_LOG_MAX_BYTES,
            backupCount=DEBUG_LOG_BACKUP_COUNT,
            encoding="utf-8",
        ),
        logging.DEBUG,
        DEBUG_FORMAT,
    )
    _attach(
        root_logger,
        logging.StreamHandler(sys.stderr),
        logging.DEBUG if debug_mode else logging.INFO,
        DEBUG_FORMAT if debug_mode else CONSOLE_FORMAT,
    )

    audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)
    audit_logger.setLevel(logging.INFO)
    audit_logger.propagate = False  # Audit lines stay off the console
    audit_logger.handlers.clear()
    _attach(
        audit_logger,
        logging.FileHandler(AUDIT_LOG_FILE, mode="a", encoding="utf-8"),
        logging.INFO,
        AUDIT_FORMAT,
    )


def get_audit_logger() -> logging.Logger:
    """Return the audit logger instance."""
    return logging.getLogger(AUDIT_LOGGER_NAME)


def log_sweep_operation(
    root: Path | str,
    folders: list[Path],
    succeeded: bool,
    elapsed_ms: int,
    recursive: bool = False,
) -> None:
    """
    Log an output folder sweep to the audit log.

    Args:
        root: Root directory that was searched
        folders: Folders that were scheduled for deletion
        succeeded: Whether every folder was deleted
        elapsed_ms: Wall-clock duration of the sweep
        recursive: Whether the search descended below the root
    """
    audit = get_audit_logger()
    mode = "SWEEP_TREE" if recursive else "SWEEP"
    names = [str(folder) for folder in folders]
    audit.info(
        "%s | root=%s | folders=%d | result=%s | elapsed_ms=%d | folders_list=%s",
        mode,
        root,
        len(folders),
        "OK" if succeeded else "FAILED",
        elapsed_ms,
        ",".join(names[:10]) + ("..." if len(names) > 10 else ""),
    )
