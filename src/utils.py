"""Shared utilities for bowl-build."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Iterable

T = TypeVar("T")


def i_index_of(target: str, needle: str) -> int:
    """Case-insensitive ``str.find``."""
    return target.lower().find(needle.lower())


def i_replace(target: str, needle: str, replacement: str) -> str:
    """Replace the first case-insensitive occurrence of ``needle``.

    Examples:
        >>> i_replace("/Work/Lib/a.js", "/work/lib/", "")
        'a.js'
        >>> i_replace("/other/a.js", "/work/lib/", "")
        '/other/a.js'
    """
    index = i_index_of(target, needle)
    if index == -1:
        return target
    return target[:index] + replacement + target[index + len(needle) :]


def unique(
    items: Iterable[T],
    key: Callable[[T], Hashable] | None = None,
) -> list[T]:
    """Return items without duplicates, keeping the first occurrence.

    Args:
        items: Items to deduplicate
        key: Optional function returning the value compared for equality

    Returns:
        List in order of first occurrence
    """
    seen: set[Hashable] = set()
    result: list[T] = []
    for item in items:
        value = key(item) if key is not None else item
        if value in seen:
            continue
        seen.add(value)
        result.append(item)
    return result


def add_path_sep(path: str) -> str:
    """Return ``path`` with a trailing ``os.sep``."""
    return path if path.endswith(os.sep) else path + os.sep
