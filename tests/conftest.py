"""Shared pytest fixtures for pathsweep tests."""

import json
import shutil
import tempfile
from pathlib import Path

import pytest

from pathsweep.core.config import DeletionSettings


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def temp_config_file(temp_dir):
    """Create a temporary config file path."""
    return temp_dir / "config" / "config.json"


@pytest.fixture
def valid_config_data():
    """Return valid configuration data."""
    return {
        "version": 1,
        "settings": {
            "timeout_ms": 2000,
            "backoff_ms": 100,
            "max_workers": 4,
        },
    }


@pytest.fixture
def temp_config_with_data(temp_config_file, valid_config_data):
    """Create a temporary config file with valid data."""
    temp_config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(temp_config_file, "w", encoding="utf-8") as f:
        json.dump(valid_config_data, f)
    return temp_config_file


@pytest.fixture
def fast_settings():
    """Deletion settings with a short timeout for failure scenarios."""
    return DeletionSettings(timeout_ms=300, backoff_ms=50, max_workers=4)


def make_tree(root: Path, depth: int = 2, width: int = 2, files: int = 2) -> Path:
    """
    Create a directory tree below ``root``.

    Every directory holds ``files`` files and, above ``depth`` 0, ``width``
    sub-directories.
    """
    root.mkdir(parents=True, exist_ok=True)
    for i in range(files):
        (root / f"file_{i}.txt").write_text(f"content {i}")
    if depth > 0:
        for i in range(width):
            make_tree(root / f"dir_{i}", depth - 1, width, files)
    return root


@pytest.fixture
def tree_factory():
    """Return the tree builder helper."""
    return make_tree
