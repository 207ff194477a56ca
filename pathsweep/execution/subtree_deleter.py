"""Parallel deletion of directory subtrees for pathsweep.

DELETION CONTRACT:
- Child directories and child files of a directory are deleted concurrently
- A directory is removed only after every child has been joined
- A directory with a failed child is reported failed without a removal attempt
- The final (non-recursive) removal is retried until the directory is gone or
  the timeout expires
- Sibling work is never cancelled; outcomes are folded with logical AND
"""

from __future__ import annotations

import asyncio
import functools
import logging
import os
from concurrent.futures import Executor, ThreadPoolExecutor
from pathlib import Path
from typing import Iterable

import aiofiles.os

from pathsweep.core.config import DeletionSettings
from pathsweep.core.models import DeletionOutcome, DeletionTask, RetryState, TaskKind
from pathsweep.execution.file_deleter import FileDeleter
from pathsweep.execution.lock_resolver import LockResolver

logger = logging.getLogger(__name__)


class DeletionError(Exception):
    """Raised when a subtree cannot be deleted at all."""
    pass


class EnumerationError(DeletionError):
    """Raised when the contents of a directory cannot be listed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Cannot list '{path}': {cause}")
        self.path = path
        self.cause = cause


def _list_children(directory: Path) -> list[DeletionTask]:
    """Non-recursive listing; symlinks are file tasks and never followed."""
    tasks = []
    with os.scandir(directory) as entries:
        for entry in entries:
            kind = TaskKind.DIRECTORY if entry.is_dir(follow_symlinks=False) else TaskKind.FILE
            tasks.append(DeletionTask(path=Path(entry.path), kind=kind))
    return tasks


class SubtreeDeleter:
    """
    Recursively deletes directory subtrees on a shared worker pool.

    Every directory becomes one coroutine, so deep or wide trees cost event
    loop tasks rather than threads. Blocking filesystem calls run on the
    executor.
    """

    def __init__(
        self,
        settings: DeletionSettings | None = None,
        executor: Executor | None = None,
        lock_resolver: LockResolver | None = None,
    ) -> None:
        """
        Initialize the SubtreeDeleter.

        Args:
            settings: Timeout and back-off. Defaults apply if None.
            executor: Pool for blocking calls. Event loop default if None.
            lock_resolver: Names blockers after a timeout. Creates new one if None.
        """
        self.settings = settings or DeletionSettings()
        self.executor = executor
        self.file_deleter = FileDeleter(executor)
        self.lock_resolver = lock_resolver or LockResolver()

    async def delete_subtrees(
        self, paths: Iterable[Path | str], announce: bool = True
    ) -> list[DeletionOutcome]:
        """
        Delete disjoint subtrees concurrently.

        Missing paths are skipped as already deleted. A path that is a
        symbolic link is removed as a link; its target is left alone. A
        subtree that cannot be listed is logged and counted as failed.

        Args:
            paths: Directories to delete
            announce: Log progress at INFO (roots) rather than DEBUG (children)

        Returns:
            One DeletionOutcome per scheduled path
        """
        log = logger.info if announce else logger.debug

        paths = [Path(path) for path in paths]
        links = await asyncio.gather(*(self._is_link(path) for path in paths))
        present = await asyncio.gather(*(self._exists(path) for path in paths))

        scheduled = []
        jobs = []
        for path, is_link, exists in zip(paths, links, present):
            if is_link:
                log("Deleting link '%s'", path)
                scheduled.append(path)
                jobs.append(self.file_deleter.delete_file(path))
                continue
            if not exists:
                # Non-existent folders are harmless w.r.t. deletion
                log("Skipping non-existent folder: '%s'", path)
                continue
            log("Deleting '%s'", path)
            scheduled.append(path)
            jobs.append(self.delete_subtree(path))

        results = await asyncio.gather(*jobs, return_exceptions=True)

        outcomes = []
        for path, result in zip(scheduled, results):
            if isinstance(result, DeletionError):
                logger.error("Error deleting '%s': %s", path, result)
                outcomes.append(DeletionOutcome(path=path, succeeded=False, error=str(result)))
            elif isinstance(result, BaseException):
                raise result
            else:
                outcomes.append(result)
        return outcomes

    async def delete_subtree(self, directory: Path | str) -> DeletionOutcome:
        """
        Delete the contents of an existing directory, then the directory.

        Args:
            directory: Directory to delete

        Returns:
            DeletionOutcome, successful only if every descendant and the
            directory itself are gone

        Raises:
            EnumerationError: If the directory cannot be listed
        """
        directory = Path(directory)

        children = await self._enumerate(directory)
        if children is None:
            return DeletionOutcome(path=directory, succeeded=True)

        subdirectories = [task.path for task in children if task.is_directory]
        files = [task.path for task in children if not task.is_directory]

        results = await asyncio.gather(
            self.delete_subtrees(subdirectories, announce=False),
            self.file_deleter.delete_files(directory, files),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

        subtree_outcomes, files_outcome = results
        children_outcome = DeletionOutcome.combine(directory, [*subtree_outcomes, files_outcome])
        if not children_outcome:
            return children_outcome

        return await self._remove_directory(directory)

    async def _enumerate(self, directory: Path) -> list[DeletionTask] | None:
        """List a directory on the pool; None if it vanished meanwhile."""
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(self.executor, _list_children, directory)
        except FileNotFoundError:
            logger.debug("Folder vanished before it could be listed: '%s'", directory)
            return None
        except OSError as e:
            raise EnumerationError(directory, e) from e

    async def _remove_directory(self, directory: Path) -> DeletionOutcome:
        """
        Remove an emptied directory, retrying transient failures.

        Removal is non-recursive, so content that reappears makes the attempt
        fail instead of being deleted silently.
        """
        state = RetryState(backoff=self.settings.backoff)

        while await self._exists(directory):
            state.attempts += 1
            try:
                await aiofiles.os.rmdir(directory, executor=self.executor)
            except FileNotFoundError:
                # Deleted during the back-off delay
                pass
            except NotADirectoryError as e:
                # Replaced by a file or link
                logger.error("Cannot remove '%s' as a directory: %s", directory, e)
                return DeletionOutcome(path=directory, succeeded=False, error=str(e))
            except OSError as e:
                logger.info(
                    "Folder deletion failure, maybe transient (%d msecs): '%s': %s",
                    state.elapsed_ms, directory, e,
                )

            if not await self._exists(directory):
                break

            if state.expired(self.settings.timeout):
                logger.error("Timed out trying to delete directory '%s'", directory)
                await self._report_blockers(directory)
                return DeletionOutcome(
                    path=directory,
                    succeeded=False,
                    error=f"Timed out after {state.attempts} attempts ({state.elapsed_ms} msecs)",
                )

            await asyncio.sleep(state.backoff)

        return DeletionOutcome(path=directory, succeeded=True)

    async def _report_blockers(self, directory: Path) -> None:
        """Name blocking processes, scanning for at most one back-off interval."""
        loop = asyncio.get_running_loop()
        report = await loop.run_in_executor(
            self.executor,
            functools.partial(
                self.lock_resolver.check_lock, directory, max_seconds=self.settings.backoff
            ),
        )
        if report.is_locked:
            logger.warning("'%s' is held open by %s", directory, report.describe())

    async def _exists(self, directory: Path) -> bool:
        return await aiofiles.os.path.isdir(directory, executor=self.executor)

    async def _is_link(self, path: Path) -> bool:
        return await aiofiles.os.path.islink(path, executor=self.executor)


class ForestDeleter:
    """Synchronous entry point deleting a set of disjoint subtrees."""

    def __init__(
        self,
        settings: DeletionSettings | None = None,
        lock_resolver: LockResolver | None = None,
    ) -> None:
        """
        Initialize the ForestDeleter.

        Args:
            settings: Timeout, back-off and pool size. Defaults apply if None.
            lock_resolver: Passed to every SubtreeDeleter. Creates new one if None.
        """
        self.settings = settings or DeletionSettings()
        self.lock_resolver = lock_resolver or LockResolver()

    def delete_subtrees(self, paths: Iterable[Path | str]) -> bool:
        """
        Delete disjoint subtrees in parallel.

        Must not be called from a running event loop; use
        ``delete_subtrees_async`` there.

        Args:
            paths: Directories to delete; none may be an ancestor of another

        Returns:
            True if every existing path was fully deleted
        """
        return asyncio.run(self.delete_subtrees_async(paths))

    async def delete_subtrees_async(self, paths: Iterable[Path | str]) -> bool:
        """Coroutine form of ``delete_subtrees``."""
        paths = list(paths)
        with ThreadPoolExecutor(
            max_workers=self.settings.max_workers,
            thread_name_prefix="pathsweep",
        ) as executor:
            deleter = SubtreeDeleter(self.settings, executor, self.lock_resolver)
            outcomes = await deleter.delete_subtrees(paths)

        # Every outcome is scanned; partial deletion is expected on failure
        succeeded = True
        for outcome in outcomes:
            if not outcome:
                succeeded = False
        return succeeded


def delete_subtrees(paths: Iterable[Path | str], settings: DeletionSettings | None = None) -> bool:
    """Delete disjoint subtrees in parallel; True on complete success."""
    return ForestDeleter(settings).delete_subtrees(paths)
