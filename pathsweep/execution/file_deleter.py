"""Single file deletion for pathsweep."""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Executor
from pathlib import Path

import aiofiles.os

from pathsweep.core.models import DeletionOutcome

logger = logging.getLogger(__name__)


class FileDeleter:
    """
    Deletes files on a worker pool, reporting failures instead of raising.

    Individual files are never retried: a locked or missing file is a failed
    leaf, and the containing directory is reported failed with it.
    """

    def __init__(self, executor: Executor | None = None) -> None:
        """
        Initialize the FileDeleter.

        Args:
            executor: Pool running the blocking remove calls. Uses the event
                loop's default executor if None.
        """
        self.executor = executor

    async def delete_file(self, path: Path) -> DeletionOutcome:
        """
        Delete a single file with exactly one attempt.

        Args:
            path: File (or symbolic link) to remove

        Returns:
            DeletionOutcome; failures are logged, never raised
        """
        try:
            await aiofiles.os.remove(path, executor=self.executor)
            return DeletionOutcome(path=path, succeeded=True)
        except Exception as e:
            logger.error("%s: %s", path, e)
            return DeletionOutcome(path=path, succeeded=False, error=str(e))

    async def delete_files(self, directory: Path, files: list[Path]) -> DeletionOutcome:
        """
        Delete files concurrently and AND their outcomes.

        Args:
            directory: Directory the files belong to, used for the combined outcome
            files: Files to remove

        Returns:
            Combined DeletionOutcome for the batch
        """
        outcomes = await asyncio.gather(*(self.delete_file(path) for path in files))
        return DeletionOutcome.combine(directory, outcomes)
