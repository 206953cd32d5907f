from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from cli import main


def _copy_mini_app_fixture(root: Path) -> None:
    fixture_app = Path(__file__).parent / "fixtures" / "mini_app"
    shutil.copytree(fixture_app, root)


def test_cli_build_writes_production_files_from_fixture(tmp_path: Path) -> None:
    app_root = tmp_path / "site"
    _copy_mini_app_fixture(app_root)

    exit_code = main(["build", str(app_root)])

    assert exit_code == 0
    assert (app_root / "app" / "home" / "index.js").is_file()
    assert (app_root / "app" / "home" / "widgets" / "tabs.js").is_file()
    assert (app_root / "lib" / "base" / "1.0" / "base.js").is_file()
    assert (app_root / "lib" / "dom" / "1.0" / "dom.js").is_file()
    assert not (app_root / "app" / "vendor" / "broken.js").exists()


def test_cli_build_combines_and_externalizes_per_settings(tmp_path: Path) -> None:
    app_root = tmp_path / "site"
    _copy_mini_app_fixture(app_root)

    assert main(["build", str(app_root)]) == 0

    home = (app_root / "app" / "home" / "index.js").read_text(encoding="utf-8")
    pieces = home.split("\n")
    assert pieces[0].startswith('define("/home/widgets/tabs",null,function(')
    assert pieces[-1].startswith(
        'define(["dom/1.0/dom","//cdn.example.com/analytics.js"],function('
    )
    assert "define(\"base/1.0/base\"" not in home

    dom = (app_root / "lib" / "dom" / "1.0" / "dom.js").read_text(encoding="utf-8")
    assert dom.startswith('define("base/1.0/base",null,function(')
    assert "/*!" in dom
    assert "dom 1.0" in dom
    assert "legacy" not in dom


def test_cli_build_single_file_with_explicit_settings(tmp_path: Path) -> None:
    app_root = tmp_path / "site"
    _copy_mini_app_fixture(app_root)
    entry = app_root / "lib" / "base" / "1.0" / "base-debug.js"

    exit_code = main(
        ["build", str(entry), "--settings", str(app_root / "bowl.toml")]
    )

    assert exit_code == 0
    built = (app_root / "lib" / "base" / "1.0" / "base.js").read_text(encoding="utf-8")
    assert built.startswith("define(function(require,exports){")
    assert not (app_root / "lib" / "dom" / "1.0" / "dom.js").exists()


def test_cli_build_missing_input_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(["build", str(tmp_path / "missing")])

    assert exit_code == 2
    assert "does not exist" in capsys.readouterr().err


def test_cli_build_without_settings_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "page-debug.js").write_text("define(function(){});", encoding="utf-8")

    exit_code = main(["build", str(tmp_path)])

    assert exit_code == 1
    assert "bowl.toml" in capsys.readouterr().err


def test_cli_build_reports_missing_module(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    app_root = tmp_path / "site"
    _copy_mini_app_fixture(app_root)
    settings = (app_root / "bowl.toml").read_text(encoding="utf-8")
    (app_root / "bowl.toml").write_text(
        settings.replace(r"ignored_paths = ['[\\/]vendor$']" + "\n", ""),
        encoding="utf-8",
    )

    exit_code = main(["build", str(app_root)])

    assert exit_code == 1
    assert "does-not-exist-debug.js" in capsys.readouterr().err


def test_cli_build_reports_undecodable_source(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    app_root = tmp_path / "site"
    _copy_mini_app_fixture(app_root)
    (app_root / "app" / "home" / "widgets" / "tabs-debug.js").write_bytes(
        b"define(function(require){var s='\xff';});"
    )

    exit_code = main(["build", str(app_root)])

    assert exit_code == 1
    assert "tabs-debug.js is not valid UTF-8" in capsys.readouterr().err
