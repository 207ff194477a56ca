"""Location and deletion of build output folders."""

from __future__ import annotations

import fnmatch
import logging
import os
import time
from pathlib import Path

from pathsweep.core.config import DeletionSettings
from pathsweep.core.constants import OUTPUT_FOLDER_PATTERN
from pathsweep.core.logging_config import log_sweep_operation
from pathsweep.core.models import SweepReport
from pathsweep.execution.subtree_deleter import DeletionError, ForestDeleter

logger = logging.getLogger(__name__)


def _raise(error: OSError) -> None:
    raise error


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def locate_output_folders(root: Path | str, recursive: bool) -> list[Path]:
    """
    Find directories named like ``*.out``.

    Args:
        root: Directory to search
        recursive: Search the whole tree below ``root`` instead of its
            immediate children

    Returns:
        Matching directories, in no particular order

    Raises:
        FileNotFoundError: If ``root`` does not exist
        NotADirectoryError: If ``root`` is not a directory
    """
    root = Path(root)
    if not root.exists():
        raise FileNotFoundError(f"Output root not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Output root is not a directory: {root}")

    if not recursive:
        with os.scandir(root) as entries:
            return [
                Path(entry.path)
                for entry in entries
                if entry.is_dir(follow_symlinks=False)
                and fnmatch.fnmatch(entry.name, OUTPUT_FOLDER_PATTERN)
            ]

    folders = []
    for dirpath, dirnames, _ in os.walk(root, onerror=_raise):
        for name in dirnames:
            folder = Path(dirpath) / name
            if fnmatch.fnmatch(name, OUTPUT_FOLDER_PATTERN) and not folder.is_symlink():
                folders.append(folder)
    return folders


def _outermost(folders: list[Path]) -> list[Path]:
    """Drop folders nested inside another folder of the list."""
    kept: set[Path] = set()
    for folder in sorted(folders, key=lambda p: len(p.parts)):
        if not any(parent in kept for parent in folder.parents):
            kept.add(folder)
    return [folder for folder in folders if folder in kept]


def sweep_output_folders(
    root: Path | str,
    recursive: bool,
    settings: DeletionSettings | None = None,
) -> SweepReport:
    """
    Locate output folders under ``root`` and delete them in parallel.

    Args:
        root: Directory to search
        recursive: Search the whole tree below ``root``
        settings: Deletion timing. Defaults apply if None.

    Returns:
        SweepReport with the deleted folders, verdict and elapsed time
    """
    started = time.monotonic()
    root = Path(root)
    report = SweepReport(root=root, recursive=recursive)

    logger.info("Locating output %s %s", "subtree" if recursive else "folder", root)
    report.folders = _outermost(locate_output_folders(root, recursive))
    logger.info("Deleting %d output folders", report.folder_count)

    report.succeeded = ForestDeleter(settings).delete_subtrees(report.folders)
    report.elapsed_ms = _elapsed_ms(started)

    if report.succeeded:
        logger.info(
            "Successfully deleted %d output folders in %d msecs",
            report.folder_count, report.elapsed_ms,
        )
    else:
        logger.error(
            "Failed deleting %d output folders in %d msecs",
            report.folder_count, report.elapsed_ms,
        )

    log_sweep_operation(root, report.folders, report.succeeded, report.elapsed_ms, recursive)
    return report


def delete_output_folders(
    root: Path | str,
    recursive: bool,
    settings: DeletionSettings | None = None,
) -> bool:
    """Delete every output folder under ``root``; True on complete success."""
    return sweep_output_folders(root, recursive, settings).succeeded


def recreate_directory(path: Path | str, settings: DeletionSettings | None = None) -> None:
    """
    Reset a scratch directory to an empty state.

    Args:
        path: Directory to delete (if present) and create again
        settings: Deletion timing. Defaults apply if None.

    Raises:
        DeletionError: If the existing directory could not be deleted
    """
    path = Path(path)
    if path.is_dir():
        started = time.monotonic()
        if not ForestDeleter(settings).delete_subtrees([path]):
            raise DeletionError(f"Could not delete output folder {path}")
        logger.info("Deleted %s in %d msecs", path, _elapsed_ms(started))

    path.mkdir(parents=True, exist_ok=True)
