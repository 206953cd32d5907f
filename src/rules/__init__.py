"""Settings and combine rules for bowl-build."""

from rules.combine import should_combine
from rules.config import (
    BuildSettings,
    CombineRule,
    CompressOptions,
    ConfigError,
    find_settings,
    load_settings,
)

__all__ = [
    "BuildSettings",
    "CombineRule",
    "CompressOptions",
    "ConfigError",
    "find_settings",
    "load_settings",
    "should_combine",
]
