"""Core data models for pathsweep."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional


class TaskKind(Enum):
    """Kind of filesystem entry a deletion task targets."""

    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class DeletionTask:
    """A path taken from a directory listing, waiting to be deleted."""

    path: Path
    kind: TaskKind

    @property
    def is_directory(self) -> bool:
        return self.kind is TaskKind.DIRECTORY


@dataclass(frozen=True)
class DeletionOutcome:
    """Result of deleting one file or one directory subtree."""

    path: Path
    succeeded: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.succeeded

    @classmethod
    def combine(cls, path: Path, outcomes: Iterable[DeletionOutcome]) -> DeletionOutcome:
        """
        Fold sibling outcomes with logical AND.

        Every outcome is inspected; the first failure message (if any) is kept
        for diagnostics.
        """
        succeeded = True
        error = None
        for outcome in outcomes:
            if not outcome:
                succeeded = False
                if error is None:
                    error = outcome.error or f"Could not delete '{outcome.path}'"
        return cls(path=path, succeeded=succeeded, error=error)


@dataclass
class RetryState:
    """Wall-clock bookkeeping for the removal attempts of one directory."""

    backoff: float  # seconds
    started: float = field(default_factory=time.monotonic)
    attempts: int = 0

    @property
    def elapsed(self) -> float:
        """Seconds since the first attempt."""
        return time.monotonic() - self.started

    @property
    def elapsed_ms(self) -> int:
        return int(self.elapsed * 1000)

    def expired(self, timeout: float) -> bool:
        """Return True once the elapsed time exceeds the timeout (seconds)."""
        return self.elapsed > timeout


@dataclass
class SweepReport:
    """Summary of an output folder sweep."""

    root: Path
    recursive: bool
    folders: list[Path] = field(default_factory=list)
    succeeded: bool = False
    elapsed_ms: int = 0
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def folder_count(self) -> int:
        return len(self.folders)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "root": str(self.root),
            "recursive": self.recursive,
            "folders": [str(folder) for folder in self.folders],
            "succeeded": self.succeeded,
            "elapsed_ms": self.elapsed_ms,
            "timestamp": self.timestamp.isoformat().replace("+00:00", "Z"),
        }
