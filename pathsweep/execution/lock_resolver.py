"""Detection of processes holding a path open."""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path

import psutil

logger = logging.getLogger(__name__)


@dataclass
class LockReport:
    """Processes found holding handles inside a path."""

    path: Path
    blocking_processes: list[str] = field(default_factory=list)

    @property
    def is_locked(self) -> bool:
        """Return True if at least one process holds the path open."""
        return bool(self.blocking_processes)

    def describe(self) -> str:
        """Human readable list of blockers for diagnostics."""
        return ", ".join(self.blocking_processes) or "unknown process"


def _is_within(candidate: str, root: str) -> bool:
    """Return True if ``candidate`` equals ``root`` or lies below it."""
    candidate = os.path.normcase(os.path.realpath(candidate))
    root = os.path.normcase(os.path.realpath(root))
    try:
        return os.path.commonpath([candidate, root]) == root
    except ValueError:
        # Different drives
        return False


class LockResolver:
    """
    Finds processes whose open files or working directory sit inside a path.

    Used after a directory removal times out, to name the indexer, scanner or
    shell that kept the directory busy.
    """

    def check_lock(self, path: Path, max_seconds: float | None = None) -> LockReport:
        """
        Check which processes hold handles under ``path``.

        Args:
            path: File or directory to inspect
            max_seconds: Stop scanning after this long. Unbounded if None.

        Returns:
            LockReport listing blockers as "name (PID n)"
        """
        blocking = self.find_blocking_processes(path, max_seconds)
        return LockReport(path=Path(path), blocking_processes=blocking)

    def find_blocking_processes(self, path: Path, max_seconds: float | None = None) -> list[str]:
        """
        Scan running processes for handles inside ``path``.

        Processes that vanish or deny access during the scan are skipped.
        With ``max_seconds`` set, the scan stops once that much time has
        passed and returns the blockers found so far.

        Args:
            path: File or directory to inspect
            max_seconds: Time budget for the scan. Unbounded if None.

        Returns:
            Sorted list of "name (PID n)" entries
        """
        root = str(path)
        blocking = set()
        deadline = None if max_seconds is None else time.monotonic() + max_seconds

        try:
            for proc in psutil.process_iter(["pid", "name", "cwd", "open_files"]):
                if deadline is not None and time.monotonic() > deadline:
                    logger.debug("Process scan for '%s' cut short after %.2f s", path, max_seconds)
                    break
                try:
                    if self._holds_path(proc.info, root):
                        name = proc.info.get("name") or "?"
                        blocking.add(f"{name} (PID {proc.info['pid']})")
                except (psutil.NoSuchProcess, psutil.AccessDenied):
                    continue
        except Exception as e:
            logger.warning("Error enumerating processes: %s", e)

        return sorted(blocking)

    def _holds_path(self, info: dict, root: str) -> bool:
        cwd = info.get("cwd")
        if cwd and _is_within(cwd, root):
            return True

        for open_file in info.get("open_files") or []:
            if _is_within(open_file.path, root):
                return True

        return False
