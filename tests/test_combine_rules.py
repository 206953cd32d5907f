from __future__ import annotations

from pathlib import Path

import pytest

from rules.combine import is_in_subtree, rules_for, should_combine
from rules.config import BuildSettings


def _settings(
    tmp_path: Path,
    *,
    combine: list[dict[str, object]] | None = None,
    include_subs: bool = False,
) -> BuildSettings:
    return BuildSettings.model_validate(
        {
            "lib_path": str(tmp_path / "lib"),
            "app_path": str(tmp_path / "app"),
            "include_subs": include_subs,
            "combine": combine or [],
        }
    )


def test_no_rules_and_no_subtree_inlines_nothing(tmp_path: Path) -> None:
    settings = _settings(tmp_path)

    assert should_combine("/home/", "dom/1.0/dom", settings) is False


def test_include_subs_inlines_modules_below_requester_directory(tmp_path: Path) -> None:
    settings = _settings(tmp_path, include_subs=True)

    assert should_combine("/home/index", "/home/widgets/tabs", settings) is True
    assert should_combine("/home/", "/home/widgets/tabs", settings) is True
    assert should_combine("/home/index", "/about/", settings) is False


def test_is_in_subtree_replaces_last_segment_only() -> None:
    assert is_in_subtree("ui/tabs/tabs", "ui/tabs/panel")
    assert not is_in_subtree("ui/tabs/tabs", "ui/menu")


def test_rule_without_includes_accepts_everything(tmp_path: Path) -> None:
    settings = _settings(tmp_path, combine=[{"target": "^/home/"}])

    assert should_combine("/home/", "dom/1.0/dom", settings) is True
    assert should_combine("/about/", "dom/1.0/dom", settings) is False


def test_rule_includes_limit_candidates(tmp_path: Path) -> None:
    settings = _settings(
        tmp_path, combine=[{"target": "^/home/", "includes": ["^base/"]}]
    )

    assert should_combine("/home/", "base/1.0/base", settings) is True
    assert should_combine("/home/", "dom/1.0/dom", settings) is False


def test_empty_includes_accepts_only_subtree(tmp_path: Path) -> None:
    settings = _settings(
        tmp_path,
        combine=[{"target": "^/home/", "includes": []}],
        include_subs=True,
    )

    assert should_combine("/home/index", "dom/1.0/dom", settings) is False
    assert should_combine("/home/index", "/home/tabs", settings) is True


def test_excepts_override_includes_and_subtree(tmp_path: Path) -> None:
    settings = _settings(
        tmp_path,
        combine=[{"target": "^/home/", "includes": ["/home/"], "excepts": ["tabs$"]}],
        include_subs=True,
    )

    assert should_combine("/home/index", "/home/menu", settings) is True
    assert should_combine("/home/index", "/home/tabs", settings) is False


def test_any_matching_rule_is_enough(tmp_path: Path) -> None:
    settings = _settings(
        tmp_path,
        combine=[
            {"target": "^/home/", "excepts": ["^dom/"]},
            {"target": "^/home/index$", "includes": ["^dom/"]},
        ],
    )

    assert should_combine("/home/index", "dom/1.0/dom", settings) is True
    assert should_combine("/home/tabs", "dom/1.0/dom", settings) is False


def test_rules_for_returns_matching_rules_in_order(tmp_path: Path) -> None:
    settings = _settings(
        tmp_path,
        combine=[{"target": "^/home/"}, {"target": "^dom/"}, {"target": "index$"}],
    )

    targets = [rule.target.pattern for rule in rules_for("/home/index", settings)]

    assert targets == ["^/home/", "index$"]


@pytest.mark.parametrize(
    "candidate",
    ["//cdn.example.com/a.js", "http://cdn.example.com/a.js"],
)
def test_opaque_candidates_are_never_combined(tmp_path: Path, candidate: str) -> None:
    settings = _settings(tmp_path, combine=[{"target": ".*"}], include_subs=True)

    assert should_combine("/home/", candidate, settings) is False


def test_should_combine_is_deterministic(tmp_path: Path) -> None:
    settings = _settings(
        tmp_path, combine=[{"target": "^/home/", "includes": ["^base/"]}]
    )

    results = {should_combine("/home/", "base/1.0/base", settings) for _ in range(5)}

    assert results == {True}
