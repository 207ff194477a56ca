"""Path canonicalization helpers.

User-supplied paths are brought into one absolute, separator-trimmed form so
that two spellings of the same directory compare equal.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Union

PathLike = Union[str, os.PathLike]

_SEPARATORS = os.sep + (os.altsep or "")


class PathError(ValueError):
    """Raised when a path string cannot be parsed by the platform."""
    pass


def _as_text(raw: PathLike) -> str:
    try:
        path = os.fspath(raw)
    except TypeError as e:
        raise PathError(f"Not a path: {raw!r}") from e
    if isinstance(path, bytes):
        path = os.fsdecode(path)
    if not path or path.isspace():
        raise PathError("Path is empty")
    if "\0" in path:
        raise PathError(f"Path contains a null character: {path!r}")
    return path


def to_absolute_path(raw: PathLike) -> str:
    """
    Resolve a path against the current directory.

    "." and ".." segments are collapsed and separators normalized; symbolic
    links are left alone.

    Raises:
        PathError: If the input is not a usable path string.
    """
    path = _as_text(raw)
    try:
        return os.path.abspath(path)
    except (OSError, ValueError) as e:
        raise PathError(f"Invalid path {path!r}: {e}") from e


def to_absolute_directory_path(raw: PathLike) -> str:
    """Absolute form of a directory path without trailing separators."""
    return strip_trailing_separators(to_absolute_path(raw))


def strip_trailing_separators(value: str) -> str:
    """
    Remove any number of trailing directory separators.

    Blank input is returned unchanged. A filesystem root keeps a single
    separator, otherwise "/" would collapse to the empty string.
    """
    if not value or value.isspace():
        return value

    stripped = value.rstrip(_SEPARATORS)
    drive = os.path.splitdrive(value)[0]
    if not stripped or (drive and stripped == drive and len(value) > len(drive)):
        return value[: len(stripped) + 1]
    return stripped


def _identity(path: Path) -> str:
    return os.path.normcase(str(path))


def is_ancestor_of(ancestor: PathLike, descendant: PathLike) -> bool:
    """
    Return True if ``descendant`` lies at least one level below ``ancestor``.

    Both paths are resolved first, so different spellings (relative, with
    "..", through a symlink) of the same directory compare equal. A directory
    is not its own ancestor.
    """
    ancestor_key = _identity(Path(_as_text(ancestor)).resolve())
    resolved = Path(_as_text(descendant)).resolve()

    for parent in resolved.parents:
        if _identity(parent) == ancestor_key:
            return True
    return False


def find_file(file_name: str, search_paths: Iterable[PathLike]) -> str | None:
    """Return the first ``<search_path>/<file_name>`` that is an existing file."""
    for search_path in search_paths:
        candidate = os.path.join(search_path, file_name)
        if os.path.isfile(candidate):
            return candidate
    return None
