"""Combine rule evaluation: should a dependency be inlined into its requester?"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from naming.ids import is_opaque

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rules.config import BuildSettings, CombineRule

_LAST_SEGMENT = re.compile(r"/[^/]+$")


def matches(pattern: re.Pattern[str], text: str) -> bool:
    """Return True when ``pattern`` matches anywhere in ``text``."""
    return pattern.search(text) is not None


def matches_any(patterns: Iterable[re.Pattern[str]], text: str) -> bool:
    return any(matches(pattern, text) for pattern in patterns)


def is_in_subtree(requester_id: str, candidate_id: str) -> bool:
    """Check whether ``candidate_id`` lives in the requester's directory.

    Examples:
        >>> is_in_subtree("/home/index", "/home/widgets/tab")
        True
        >>> is_in_subtree("/home/index", "/about/index")
        False
    """
    return candidate_id.startswith(_LAST_SEGMENT.sub("/", requester_id, count=1))


def rules_for(requester_id: str, settings: BuildSettings) -> list[CombineRule]:
    """Return every combine rule whose target matches the requester."""
    return [rule for rule in settings.combine if matches(rule.target, requester_id)]


def rule_accepts(rule: CombineRule, candidate_id: str, *, in_subtree: bool) -> bool:
    """A rule accepts a candidate it includes and does not except."""
    included = (
        in_subtree
        or rule.includes is None
        or matches_any(rule.includes, candidate_id)
    )
    if not included:
        return False
    return rule.excepts is None or not matches_any(rule.excepts, candidate_id)


def should_combine(
    requester_id: str,
    candidate_id: str,
    settings: BuildSettings,
) -> bool:
    """Decide whether ``candidate_id`` is inlined into ``requester_id``.

    Opaque references are never inlined. Without a matching rule the answer
    is the ``include_subs`` subtree check alone; with matching rules, any
    single accepting rule is enough.
    """
    if is_opaque(candidate_id):
        return False

    in_subtree = settings.include_subs and is_in_subtree(requester_id, candidate_id)

    rules = rules_for(requester_id, settings)
    if not rules:
        return in_subtree

    return any(rule_accepts(rule, candidate_id, in_subtree=in_subtree) for rule in rules)


__all__ = [
    "is_in_subtree",
    "matches",
    "matches_any",
    "rule_accepts",
    "rules_for",
    "should_combine",
]
