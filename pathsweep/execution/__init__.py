"""Parallel deletion engine package for pathsweep."""

from pathsweep.execution.lock_resolver import LockResolver, LockReport
from pathsweep.execution.file_deleter import FileDeleter
from pathsweep.execution.subtree_deleter import (
    DeletionError,
    EnumerationError,
    ForestDeleter,
    SubtreeDeleter,
    delete_subtrees,
)
from pathsweep.execution.output_folders import (
    delete_output_folders,
    locate_output_folders,
    recreate_directory,
    sweep_output_folders,
)

__all__ = [
    "LockResolver",
    "LockReport",
    "FileDeleter",
    "DeletionError",
    "EnumerationError",
    "ForestDeleter",
    "SubtreeDeleter",
    "delete_subtrees",
    "delete_output_folders",
    "locate_output_folders",
    "recreate_directory",
    "sweep_output_folders",
]
