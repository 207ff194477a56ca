"""Core module for pathsweep."""

from .config import ConfigManager, ConfigError, DeletionSettings
from .logging_config import setup_logging, get_audit_logger, log_sweep_operation
from .models import (
    TaskKind,
    DeletionTask,
    DeletionOutcome,
    RetryState,
    SweepReport,
)
from .paths import (
    PathError,
    to_absolute_path,
    to_absolute_directory_path,
    strip_trailing_separators,
    is_ancestor_of,
    find_file,
)

__all__ = [
    # Config
    "ConfigManager",
    "ConfigError",
    "DeletionSettings",
    # Logging
    "setup_logging",
    "get_audit_logger",
    "log_sweep_operation",
    # Models
    "TaskKind",
    "DeletionTask",
    "DeletionOutcome",
    "RetryState",
    "SweepReport",
    # Paths
    "PathError",
    "to_absolute_path",
    "to_absolute_directory_path",
    "strip_trailing_separators",
    "is_ancestor_of",
    "find_file",
]
