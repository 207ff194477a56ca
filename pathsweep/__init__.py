"""pathsweep: parallel, retrying deletion of directory subtrees."""

from pathsweep.core.constants import APP_VERSION as __version__
from pathsweep.core.config import DeletionSettings
from pathsweep.core.paths import (
    PathError,
    find_file,
    is_ancestor_of,
    strip_trailing_separators,
    to_absolute_directory_path,
    to_absolute_path,
)
from pathsweep.execution import (
    DeletionError,
    delete_output_folders,
    delete_subtrees,
    locate_output_folders,
    recreate_directory,
)

__all__ = [
    "__version__",
    "DeletionSettings",
    "PathError",
    "find_file",
    "is_ancestor_of",
    "strip_trailing_separators",
    "to_absolute_directory_path",
    "to_absolute_path",
    "DeletionError",
    "delete_output_folders",
    "delete_subtrees",
    "locate_output_folders",
    "recreate_directory",
]
