"""Integration test fixtures.

Provides a build directory shaped like a real solution output:
- Three output folders with nested content
- Source folders that must survive a sweep
- A config file with a short timeout for failure scenarios
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def no_log_files():
    """Keep CLI runs from reconfiguring logging or writing log files."""
    with patch("pathsweep.cli.setup_logging") as mock_setup:
        yield mock_setup


@pytest.fixture
def solution_dir(temp_dir, tree_factory) -> Path:
    """
    Create a solution directory:

        solution/app.out/...        (depth 2 tree)
        solution/lib.out/...        (depth 2 tree)
        solution/tests.out/...      (depth 1 tree)
        solution/src/app/main.c
        solution/src/lib/obj.out/   (nested output folder)
    """
    root = temp_dir / "solution"
    tree_factory(root / "app.out", depth=2, width=3, files=3)
    tree_factory(root / "lib.out", depth=2, width=2, files=4)
    tree_factory(root / "tests.out", depth=1, width=2, files=1)
    (root / "src" / "app").mkdir(parents=True)
    (root / "src" / "app" / "main.c").write_text("int main(void) { return 0; }")
    tree_factory(root / "src" / "lib" / "obj.out", depth=1, width=1, files=2)
    return root


@pytest.fixture
def fast_config(temp_dir) -> Path:
    """Config file with a short timeout and back-off."""
    path = temp_dir / "config" / "config.json"
    path.parent.mkdir(parents=True)
    path.write_text(
        json.dumps({"version": 1, "settings": {"timeout_ms": 300, "backoff_ms": 50, "max_workers": 4}}),
        encoding="utf-8",
    )
    return path
