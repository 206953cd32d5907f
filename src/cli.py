"""Command-line interface for bowl-build."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from bundle.sources import MissingModuleError, UnreadableModuleError
from bundle.write import build_tree
from graph.resolver import DependencyCycleError
from rules.config import ConfigError, find_settings, load_settings


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bowl")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every file opened and module resolved",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build", help="Build *-debug sources into combined modules"
    )
    build_parser.add_argument(
        "input",
        nargs="?",
        default=".",
        help="Debug source file or directory to build (default: .)",
    )
    build_parser.add_argument(
        "--settings",
        default=None,
        help="Settings file (default: bowl.toml beside the input)",
    )

    return parser


def _resolve_settings_path(input_path: Path, settings: str | None) -> Path:
    if settings is None:
        return find_settings(input_path)
    return Path(settings).expanduser().absolute()


def _handle_build(input_path: Path, settings: str | None) -> int:
    if not input_path.exists():
        sys.stderr.write(f"error: {input_path} does not exist\n")
        return 2

    settings_path = _resolve_settings_path(input_path, settings)
    try:
        build_settings = load_settings(settings_path)
        build_tree(input_path, build_settings)
    except (
        ConfigError,
        MissingModuleError,
        UnreadableModuleError,
        DependencyCycleError,
    ) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "build":
        input_path = Path(args.input).expanduser().absolute()
        return _handle_build(input_path, args.settings)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
