"""Static require() extraction for define()-wrapped modules."""

from __future__ import annotations

import re

from contract.conventions import REQUIRE_CALL
from utils import unique

_BLOCK_COMMENT_LINES = re.compile(r"^\s*/\*[\s\S]*?\*/\s*$", re.MULTILINE)
_LINE_COMMENT = re.compile(r"^\s*//.*$", re.MULTILINE)


def strip_comments(source: str) -> str:
    """Remove comments that occupy whole lines.

    Trailing comments after code are kept; a ``require`` inside one is
    still reported.
    """
    source = _BLOCK_COMMENT_LINES.sub("", source)
    return _LINE_COMMENT.sub("", source)


def extract_requires(source: str) -> list[str]:
    """Extract the literal specifiers passed to ``require``.

    Args:
        source: Module source text

    Returns:
        Specifiers in order of first occurrence, without duplicates.
        Member calls such as ``obj.require("x")`` are ignored.

    Examples:
        >>> extract_requires("var a = require('a'), b = require(\\"b\\"), c = require('a');")
        ['a', 'b']
        >>> extract_requires("// require('gone')\\nmodule.require('x');")
        []
    """
    code = strip_comments(source)
    return unique(match.group(2) for match in REQUIRE_CALL.finditer(code))


__all__ = ["extract_requires", "strip_comments"]
