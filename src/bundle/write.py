"""Build every debug source under a path into its production file."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING

from bundle.assemble import Bundler
from naming.ids import convert_path
from scan.files import find_debug_sources

if TYPE_CHECKING:
    from bundle.compress import Compressor
    from rules.config import BuildSettings

logger = logging.getLogger(__name__)


def build_tree(
    input_path: Path,
    settings: BuildSettings,
    compressor: Compressor | None = None,
) -> list[Path]:
    """Build each ``*-debug`` source under ``input_path``.

    ``foo-debug.js`` is written to ``foo.js`` beside it. All files share one
    session, so a module is read, resolved and compiled at most once.

    Args:
        input_path: A debug source file or a directory to walk
        settings: Resolved build settings
        compressor: Optional replacement for the rjsmin compressor

    Returns:
        Paths of the written files, in build order.
    """
    started = time.perf_counter()
    bundler = Bundler(settings, compressor)

    written: list[Path] = []
    for source in find_debug_sources(
        input_path,
        ignored_paths=settings.ignored_paths,
        gitignore=settings.gitignore,
    ):
        destination = Path(convert_path(str(source), is_debug=False))
        logger.info("Building to %s", destination)
        destination.write_text(bundler.build(str(source)), encoding="utf-8")
        written.append(destination)

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("Built %d file(s) in %.0fms", len(written), elapsed_ms)
    return written


__all__ = ["build_tree"]
