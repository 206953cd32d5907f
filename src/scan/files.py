"""Source tree scanning for bowl-build."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from contract.conventions import DEBUG_SOURCE
from rules.combine import matches_any

if TYPE_CHECKING:
    import re
    from collections.abc import Callable, Iterator, Sequence
    from pathlib import Path


def _is_ignored(
    path: Path,
    root: Path,
    ignored_paths: Sequence[re.Pattern[str]],
) -> bool:
    """Check the path and every directory between it and the root."""
    if not ignored_paths:
        return False
    candidates = [path]
    candidates.extend(parent for parent in path.parents if parent.is_relative_to(root))
    return any(matches_any(ignored_paths, str(candidate)) for candidate in candidates)


def _should_include_file(
    path: Path,
    root: Path,
    ignored_paths: Sequence[re.Pattern[str]],
    gitignore_matches: Callable[[str], bool] | None,
) -> bool:
    """Check if a file is a debug source that passes all filtering rules."""
    if not path.is_file() or path.is_symlink():
        return False

    if DEBUG_SOURCE.search(path.name) is None:
        return False

    if gitignore_matches is not None and gitignore_matches(str(path)):
        return False

    return not _is_ignored(path, root, ignored_paths)


def _build_gitignore_matcher(root: Path) -> Callable[[str], bool] | None:
    gitignore_path = root / ".gitignore"
    if gitignore_path.is_file():
        return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
    return None


def find_debug_sources(
    input_path: Path,
    *,
    ignored_paths: Sequence[re.Pattern[str]] = (),
    gitignore: bool = False,
) -> Iterator[Path]:
    """Find the debug sources to build under ``input_path``.

    Args:
        input_path: A single file or a directory to walk
        ignored_paths: Regexes searched in absolute paths; a matching
            directory excludes everything below it
        gitignore: Also skip files ignored by ``input_path/.gitignore``

    Yields:
        Absolute paths of ``*-debug.<ext>`` files, sorted for deterministic
        build order.
    """
    input_path = input_path.absolute()

    if input_path.is_file():
        root = input_path.parent
        if _should_include_file(input_path, root, ignored_paths, None):
            yield input_path
        return

    gitignore_matches = _build_gitignore_matcher(input_path) if gitignore else None

    matched_files = [
        path
        for path in input_path.rglob("*")
        if _should_include_file(path, input_path, ignored_paths, gitignore_matches)
    ]
    matched_files.sort(key=lambda p: p.relative_to(input_path).as_posix())

    yield from matched_files


__all__ = ["find_debug_sources"]
