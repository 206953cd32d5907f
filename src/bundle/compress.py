"""Default JavaScript compressor built on rjsmin."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import TYPE_CHECKING

import rjsmin

if TYPE_CHECKING:
    from rules.config import CompressOptions

Compressor = Callable[[str, "CompressOptions"], str]

_BANG_COMMENT = re.compile(r"/\*![\s\S]*?\*/")
_NON_ASCII = re.compile(r"[^\x00-\x7f]")


def _escape_char(match: re.Match[str]) -> str:
    code_point = ord(match.group(0))
    if code_point > 0xFFFF:
        code_point -= 0x10000
        high = 0xD800 + (code_point >> 10)
        low = 0xDC00 + (code_point & 0x3FF)
        return f"\\u{high:04x}\\u{low:04x}"
    return f"\\u{code_point:04x}"


def escape_non_ascii(code: str) -> str:
    """Replace non-ASCII characters with ``\\uXXXX`` escapes (surrogate pairs above the BMP)."""
    return _NON_ASCII.sub(_escape_char, code)


def _filter_comments(code: str, pattern: re.Pattern[str]) -> str:
    # The pattern sees the comment body, e.g. "!license" for /*!license*/.
    def keep(match: re.Match[str]) -> str:
        return match.group(0) if pattern.search(match.group(0)[2:-2]) else ""

    return _BANG_COMMENT.sub(keep, code)


def rjsmin_compress(code: str, options: CompressOptions) -> str:
    """Minify ``code`` with rjsmin according to ``options``."""
    comments = options.comments
    result = rjsmin.jsmin(code, keep_bang_comments=bool(comments))

    if isinstance(comments, re.Pattern):
        result = _filter_comments(result, comments)
    if options.ascii_only:
        result = escape_non_ascii(result)
    return result


__all__ = ["Compressor", "escape_non_ascii", "rjsmin_compress"]
