from __future__ import annotations

import os
import re
import tomllib
from pathlib import Path
from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from contract.conventions import SETTINGS_FILENAME
from utils import add_path_sep

# Settings keys whose lists extend the imported settings instead of replacing them.
_APPENDED_KEYS = frozenset({"ignored_paths", "combine"})
_ROOT_KEYS = frozenset({"lib_path", "app_path"})

_JSON_LINE_COMMENT = re.compile(r"^\s*/{2,}.*$", re.MULTILINE)


class CompressOptions(BaseModel):
    """Options handed to the compressor for every module."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    comments: bool | re.Pattern[str] | None = Field(
        default=None,
        description="Keep /*! */ comments; a regex keeps only those it matches",
    )
    ascii_only: bool = Field(
        default=False,
        description="Escape non-ASCII characters in the output",
    )


class CombineRule(BaseModel):
    """Which dependencies get inlined into modules matching ``target``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    target: re.Pattern[str] = Field(description="Regex matched against requester ids")
    includes: tuple[re.Pattern[str], ...] | None = Field(
        default=None,
        description="Dependency ids to inline (absent = every dependency)",
    )
    excepts: tuple[re.Pattern[str], ...] | None = Field(
        default=None,
        description="Dependency ids never inlined, overriding includes",
    )


class BuildSettings(BaseModel):
    """Fully resolved settings for one build."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    lib_path: str = Field(description="Library root; bare specifiers resolve here")
    app_path: str = Field(description="Application root; '/x' specifiers resolve here")
    ignored_paths: tuple[re.Pattern[str], ...] = Field(
        default=(),
        description="Regexes of paths skipped when walking a source tree",
    )
    include_subs: bool = Field(
        default=False,
        description="Inline dependencies living under the requester's directory",
    )
    combine: tuple[CombineRule, ...] = Field(
        default=(),
        description="Combine rules, evaluated together (any accepting rule wins)",
    )
    compress: CompressOptions = Field(default_factory=CompressOptions)
    gitignore: bool = Field(
        default=False,
        description="Skip .gitignore'd files when walking a source tree",
    )

    @field_validator("lib_path", "app_path")
    @classmethod
    def normalize_root(cls, v: str) -> str:
        """Roots are absolute and end with a separator so prefix checks stay exact."""
        if not v:
            msg = "must be a non-empty path"
            raise ValueError(msg)
        return add_path_sep(os.path.abspath(os.path.expanduser(v)))


class ConfigError(Exception):
    """Raised when a settings file is missing or cannot be parsed."""


def _read_settings_file(path: Path) -> dict[str, Any]:
    if not path.is_file():
        msg = f"Settings file {path} does not exist"
        raise ConfigError(msg)

    try:
        if path.suffix == ".toml":
            with path.open("rb") as f:
                data = tomllib.load(f)
        else:
            # JSON settings may carry whole-line // comments.
            text = path.read_text(encoding="utf-8")
            data = orjson.loads(_JSON_LINE_COMMENT.sub("", text))
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON in {path}: {e}"
        raise ConfigError(msg) from e
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read {path}: {e}"
        raise ConfigError(msg) from e

    if not isinstance(data, dict):
        msg = f"Settings in {path} must be a table of keys"
        raise ConfigError(msg)
    return data


def _merge_settings_data(path: Path, chain: tuple[Path, ...] = ()) -> dict[str, Any]:
    """Load a settings file on top of the file it imports, if any."""
    path = Path(os.path.abspath(path))
    if path in chain:
        cycle = " -> ".join(str(p) for p in (*chain, path))
        msg = f"Settings import cycle: {cycle}"
        raise ConfigError(msg)

    data = _read_settings_file(path)
    base_dir = path.parent

    merged: dict[str, Any] = {}
    imported = data.pop("import", None)
    if imported is not None:
        if not isinstance(imported, str) or not imported:
            msg = f"'import' in {path} must be a path string"
            raise ConfigError(msg)
        merged = _merge_settings_data(base_dir / imported, (*chain, path))

    for key, value in data.items():
        if key in _ROOT_KEYS and isinstance(value, str) and value:
            value = os.path.abspath(os.path.join(base_dir, os.path.expanduser(value)))
        elif key in _APPENDED_KEYS and isinstance(value, list):
            value = [*merged.get(key, []), *value]
        merged[key] = value

    return merged


def load_settings(path: Path) -> BuildSettings:
    """Load build settings from a TOML or JSON settings file.

    An ``import`` key names another settings file, relative to the importing
    one. It is loaded first; the importing file then overrides scalar keys
    and appends to ``ignored_paths`` and ``combine``. Relative roots resolve
    against the directory of the file that declares them.
    """
    data = _merge_settings_data(path)
    try:
        return BuildSettings.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid settings in {path}: {e}"
        raise ConfigError(msg) from e


def find_settings(input_path: Path) -> Path:
    """Return the default settings file location for a build input."""
    base_dir = input_path if input_path.is_dir() else input_path.parent
    return base_dir / SETTINGS_FILENAME
