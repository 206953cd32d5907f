"""Bundle assembly: one artifact per entry module."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from bundle.compiler import ModuleCompiler
from bundle.compress import rjsmin_compress
from bundle.sources import SourceCache
from graph.resolver import DependencyResolver

if TYPE_CHECKING:
    from bundle.compress import Compressor
    from graph.records import DependencyRecord
    from rules.config import BuildSettings


class Bundler:
    """A build session.

    Owns the source, graph and compiled-module caches. They live exactly as
    long as the bundler, so reuse one instance for every entry of a single
    build and drop it afterwards. Not safe to share between threads.
    """

    def __init__(
        self,
        settings: BuildSettings,
        compressor: Compressor | None = None,
    ) -> None:
        self.settings = settings
        self.sources = SourceCache()
        self.resolver = DependencyResolver(settings, self.sources)
        self.compiler = ModuleCompiler(
            settings, self.sources, compressor or rjsmin_compress
        )

    def resolve(self, path: str) -> list[DependencyRecord] | None:
        return self.resolver.resolve(path)

    def build(self, entry_path: str) -> str:
        """Build the artifact for ``entry_path``.

        Inlined modules come first, each compiled standalone under its own
        id, in resolution order. The entry module comes last, anonymous,
        carrying the ids it still requires at load time.
        """
        entry_path = os.path.abspath(entry_path)
        pieces: list[str] = []
        required: list[str] = []

        for record in self.resolve(entry_path) or ():
            if record.external is not None:
                continue
            if record.combined:
                pieces.append(self.compiler.compile(record.path, None, record.id))
            else:
                required.append(record.id)

        pieces.append(self.compiler.compile(entry_path, required or None, None))
        return "\n".join(pieces)


def build(
    entry_path: str,
    settings: BuildSettings,
    compressor: Compressor | None = None,
) -> str:
    """Build a single entry module in a fresh session."""
    return Bundler(settings, compressor).build(entry_path)


__all__ = ["Bundler", "build"]
