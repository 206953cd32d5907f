"""File layout conventions shared across bowl-build."""

from contract.conventions import (
    DEBUG_SUFFIX,
    DEFAULT_ENTRY,
    SCRIPT_EXT,
    SETTINGS_FILENAME,
    VERSION_DELIMITER,
)

__all__ = [
    "DEBUG_SUFFIX",
    "DEFAULT_ENTRY",
    "SCRIPT_EXT",
    "SETTINGS_FILENAME",
    "VERSION_DELIMITER",
]
