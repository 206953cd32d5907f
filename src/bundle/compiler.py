"""Per-module compilation: compress and stamp the define() header."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import orjson

from contract.conventions import DEFINE_HEADER

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bundle.compress import Compressor
    from bundle.sources import SourceCache
    from rules.config import BuildSettings

_LINE_BREAK = re.compile(r"\r\n?")


def _js_literal(value: object) -> str:
    return orjson.dumps(value).decode("utf-8")


def stamp_header(
    code: str,
    module_id: str | None,
    deps: Sequence[str] | None,
) -> str:
    """Insert the id and dependency list into the first ``define(`` call.

    ``define(function(`` becomes ``define("id",["dep"],function(``. The id
    is omitted when None; the dependency list is written as ``null`` when
    an id is present without dependencies, and omitted when both are absent.
    """

    def replace(match: re.Match[str]) -> str:
        params: list[str] = []
        if module_id is not None:
            params.append(_js_literal(module_id))
        if params or deps:
            params.append(_js_literal(list(deps)) if deps else "null")
        params.append(match.group(2))
        return match.group(1) + ",".join(params)

    return DEFINE_HEADER.sub(replace, code, count=1)


class ModuleCompiler:
    """Compiles modules, caching by path, explicit dependency set and id."""

    def __init__(
        self,
        settings: BuildSettings,
        sources: SourceCache,
        compressor: Compressor,
    ) -> None:
        self.settings = settings
        self.sources = sources
        self.compressor = compressor
        self._compiled: dict[
            tuple[str, tuple[str, ...] | None, str | None], str
        ] = {}

    def compile(
        self,
        path: str,
        deps: Sequence[str] | None,
        module_id: str | None,
    ) -> str:
        """Return the compiled text of the module at ``path``.

        Args:
            path: Debug source path of the module
            deps: Dependency ids the module still requires at load time
            module_id: Explicit id to stamp, or None for an anonymous module

        Returns:
            Compressed code with ``\\n`` line endings.
        """
        # An entry module and the same file inlined elsewhere differ only by id.
        key = (path, tuple(sorted(deps)) if deps else None, module_id)
        if key not in self._compiled:
            code = self.compressor(self.sources.read(path), self.settings.compress)
            code = stamp_header(code, module_id, deps)
            self._compiled[key] = _LINE_BREAK.sub("\n", code)
        return self._compiled[key]


__all__ = ["ModuleCompiler", "stamp_header"]
