"""Application constants and paths for pathsweep."""

import os
from pathlib import Path

# Application metadata
APP_NAME = "pathsweep"
APP_VERSION = "1.0.0"
CONFIG_VERSION = 1

# Base paths
APP_ROOT = Path(os.environ.get("PATHSWEEP_HOME") or Path.home() / ".pathsweep")
CONFIG_DIR = APP_ROOT
LOGS_DIR = APP_ROOT / "logs"

# File paths
CONFIG_FILE = CONFIG_DIR / "config.json"
DEBUG_LOG_FILE = LOGS_DIR / "debug.log"
AUDIT_LOG_FILE = LOGS_DIR / "audit.log"

# Logging settings
DEBUG_LOG_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
DEBUG_LOG_BACKUP_COUNT = 3

# Millisecond timeout for the final removal of a single directory.
DELETION_TIMEOUT_MS = 10000

# Back-off between directory removal attempts. With the directory open in a
# file explorer, handle release typically takes about 2 seconds.
DIRECTORY_DELETION_BACKOFF_MS = 500

# Naming convention of build output folders
OUTPUT_FOLDER_PATTERN = "*.out"

# Default settings
DEFAULT_SETTINGS = {
    "timeout_ms": DELETION_TIMEOUT_MS,
    "backoff_ms": DIRECTORY_DELETION_BACKOFF_MS,
    "max_workers": None,
}
