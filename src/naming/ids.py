"""Translation between module paths, module ids and require specifiers."""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING

from contract.conventions import (
    DEBUG_SUFFIX,
    DEFAULT_ENTRY,
    SCRIPT_EXT,
    VERSION_DELIMITER,
)
from utils import add_path_sep, i_index_of, i_replace

if TYPE_CHECKING:
    from rules.config import BuildSettings

_OPAQUE = re.compile(r"^(?:[a-z]+:)?/{2,}", re.IGNORECASE)
_SCRIPT_ID = re.compile(re.escape(SCRIPT_EXT) + "$", re.IGNORECASE)
_DEBUG_TAIL = re.compile(re.escape(DEBUG_SUFFIX) + "$", re.IGNORECASE)
_DEBUG_BEFORE_EXT = re.compile(re.escape(DEBUG_SUFFIX) + r"(\.[^.]+)$", re.IGNORECASE)
_INDEX_TAIL = re.compile("/" + re.escape(DEFAULT_ENTRY) + "$", re.IGNORECASE)
_VERSIONED = re.compile(
    r"([^\\/]+)" + re.escape(VERSION_DELIMITER) + r"([^\\/]+)"
)
_LEADING_SEP = re.compile(r"^[\\/]")
_TRAILING_SEP = re.compile(r"[\\/]$")
_TRAILING_SEPS = re.compile(r"[\\/]+$")


def is_opaque(specifier: str) -> bool:
    """Return True for ``scheme://`` and protocol-relative ``//`` specifiers.

    Such references are left for the loader and never read from disk.
    """
    return _OPAQUE.match(specifier) is not None


def _choose_root(path: str, settings: BuildSettings) -> str | None:
    lib_match = i_index_of(path, settings.lib_path) == 0
    app_match = i_index_of(path, settings.app_path) == 0

    if lib_match and app_match:
        # Nested roots: the deeper one wins, lib on a tie.
        if len(settings.lib_path) >= len(settings.app_path):
            return settings.lib_path
        return settings.app_path
    if lib_match:
        return settings.lib_path
    if app_match:
        return settings.app_path
    return None


def to_module_id(path: str, settings: BuildSettings) -> str:
    """Convert a module path to its module id.

    Paths under the library root map to bare ids, paths under the application
    root to ids with a leading ``/``.

    Examples (lib_path ``/w/lib/``, app_path ``/w/app/``):
        ``/w/lib/dom/1.0/dom-debug.js`` -> ``dom/1.0/dom``
        ``/w/app/home/index-debug.js`` -> ``/home/``
        ``/w/lib/ui/skin-debug.css`` -> ``ui/skin.css``
    """
    base = _choose_root(path, settings)
    if base is None:
        module_id = path
    else:
        prefix = "/" if base == settings.app_path else ""
        module_id = prefix + i_replace(path, base, "")

    module_id = module_id.replace(os.sep, "/")

    if _SCRIPT_ID.search(module_id):
        module_id = _SCRIPT_ID.sub("", module_id)
        module_id = _DEBUG_TAIL.sub("", module_id)
        return _INDEX_TAIL.sub("/", module_id)

    return _DEBUG_BEFORE_EXT.sub(r"\1", module_id)


def _expand_versions(specifier: str) -> str:
    return _VERSIONED.sub(r"\1/\2/\1", specifier)


def to_module_path(from_dir: str, specifier: str, settings: BuildSettings) -> str:
    """Resolve a require specifier to an absolute path.

    Args:
        from_dir: Directory of the requiring module
        specifier: The literal passed to ``require``
        settings: Build settings providing the library and application roots

    Returns:
        Absolute normalized path. Ends with ``os.sep`` when the specifier
        names a directory.
    """
    if _LEADING_SEP.match(specifier):
        from_dir = settings.app_path
        specifier = specifier[1:]
    elif not specifier.startswith("."):
        from_dir = settings.lib_path

    specifier = _expand_versions(specifier)

    result = os.path.abspath(os.path.join(from_dir, specifier))
    if _TRAILING_SEP.search(specifier):
        result = add_path_sep(result)
    return result


def convert_path(path: str, is_debug: bool) -> str:
    """Switch a module path between its debug and production file names.

    Directory paths get the default entry basename, a missing extension
    defaults to the script extension.

    Examples:
        ``/w/lib/dom/`` (debug) -> ``/w/lib/dom/index-debug.js``
        ``/w/lib/a-debug.js`` (production) -> ``/w/lib/a.js``
    """
    if _TRAILING_SEPS.search(path):
        path += DEFAULT_ENTRY

    dirname, filename = os.path.split(path)
    basename, extname = os.path.splitext(filename)

    if is_debug:
        if not _DEBUG_TAIL.search(basename):
            basename += DEBUG_SUFFIX
    else:
        basename = _DEBUG_TAIL.sub("", basename)

    if not extname:
        extname = SCRIPT_EXT

    return os.path.normpath(os.path.join(dirname, basename + extname))


__all__ = ["convert_path", "is_opaque", "to_module_id", "to_module_path"]
