"""
pathsweep: command-line interface

Commands:
  pathsweep outputs ROOT [-r]       # delete *.out folders under ROOT
  pathsweep locate ROOT [-r]        # list *.out folders under ROOT
  pathsweep delete PATH...          # delete disjoint directory subtrees
  pathsweep recreate PATH           # reset PATH to an empty directory
  pathsweep find NAME DIR...        # first DIR/NAME that exists
"""

from __future__ import annotations

import argparse
import itertools
import logging
import sys
from pathlib import Path
from typing import Sequence

from pathsweep.core.config import ConfigError, ConfigManager, DeletionSettings
from pathsweep.core.constants import APP_NAME, APP_VERSION
from pathsweep.core.logging_config import setup_logging
from pathsweep.core.paths import (
    PathError,
    find_file,
    is_ancestor_of,
    to_absolute_directory_path,
)
from pathsweep.execution import (
    DeletionError,
    ForestDeleter,
    delete_output_folders,
    locate_output_folders,
    recreate_directory,
)

logger = logging.getLogger(__name__)


def _load_settings(args: argparse.Namespace) -> DeletionSettings:
    """Defaults, then the config file, then command-line overrides."""
    config = ConfigManager(Path(args.config) if args.config else None)
    return config.deletion_settings.with_overrides(
        timeout_ms=args.timeout_ms,
        backoff_ms=args.backoff_ms,
        max_workers=args.workers,
    )


def _overlapping(paths: list[str]) -> tuple[str, str] | None:
    for first, second in itertools.permutations(paths, 2):
        if first == second or is_ancestor_of(first, second):
            return first, second
    return None


def cmd_outputs(args: argparse.Namespace, settings: DeletionSettings) -> int:
    root = to_absolute_directory_path(args.root)
    return 0 if delete_output_folders(root, args.recursive, settings) else 1


def cmd_locate(args: argparse.Namespace, settings: DeletionSettings) -> int:
    root = to_absolute_directory_path(args.root)
    for folder in sorted(locate_output_folders(root, args.recursive)):
        print(folder)
    return 0


def cmd_delete(args: argparse.Namespace, settings: DeletionSettings) -> int:
    paths = [to_absolute_directory_path(path) for path in args.paths]
    overlap = _overlapping(paths)
    if overlap:
        logger.error("Paths must be disjoint: '%s' contains '%s'", *overlap)
        return 1
    return 0 if ForestDeleter(settings).delete_subtrees(paths) else 1


def cmd_recreate(args: argparse.Namespace, settings: DeletionSettings) -> int:
    recreate_directory(to_absolute_directory_path(args.path), settings)
    return 0


def cmd_find(args: argparse.Namespace, settings: DeletionSettings) -> int:
    found = find_file(args.name, args.search_paths)
    if found is None:
        logger.info("%s not found", args.name)
        return 1
    print(found)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Parallel, retrying deletion of directory subtrees",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument("--timeout-ms", type=int, help="Timeout for removing one directory")
    parser.add_argument("--backoff-ms", type=int, help="Delay between directory removal attempts")
    parser.add_argument("--workers", type=int, help="Size of the filesystem worker pool")
    parser.add_argument("--debug", action="store_true", help="Print debug diagnostics")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("outputs", help="Delete *.out folders under ROOT")
    p.add_argument("root")
    p.add_argument("-r", "--recursive", action="store_true", help="Search the whole tree")
    p.set_defaults(func=cmd_outputs)

    p = sub.add_parser("locate", help="List *.out folders under ROOT")
    p.add_argument("root")
    p.add_argument("-r", "--recursive", action="store_true", help="Search the whole tree")
    p.set_defaults(func=cmd_locate)

    p = sub.add_parser("delete", help="Delete disjoint directory subtrees")
    p.add_argument("paths", nargs="+")
    p.set_defaults(func=cmd_delete)

    p = sub.add_parser("recreate", help="Delete PATH if present and create it empty")
    p.add_argument("path")
    p.set_defaults(func=cmd_recreate)

    p = sub.add_parser("find", help="Print the first SEARCH_PATH/NAME that exists")
    p.add_argument("name")
    p.add_argument("search_paths", nargs="+")
    p.set_defaults(func=cmd_find)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Command-line entry point.

    Returns:
        Exit code (0 for success)
    """
    args = build_parser().parse_args(argv)
    setup_logging(debug_mode=args.debug)

    try:
        settings = _load_settings(args)
        return args.func(args, settings)
    except (ConfigError, DeletionError, PathError, OSError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
