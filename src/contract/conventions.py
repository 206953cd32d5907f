"""File layout conventions shared by the resolver, compiler and tree builder.

These are the names the module loader at runtime relies on, so they are the
stable boundary between a source tree and the artifacts built from it.
"""

from __future__ import annotations

import re

# Extension assumed for ids and specifiers without one.
SCRIPT_EXT = ".js"

# Basename used when a specifier names a directory.
DEFAULT_ENTRY = "index"

# Marks the uncompiled variant of a module: ``foo-debug.js`` builds ``foo.js``.
DEBUG_SUFFIX = "-debug"

# Separates a package name from its version: ``pkg@1.2`` is ``pkg/1.2/pkg``.
VERSION_DELIMITER = "@"

# Settings file looked up next to the build input.
SETTINGS_FILENAME = "bowl.toml"

# ---------------------------------------------------------------------------
# Module wrapper
# ---------------------------------------------------------------------------
# Source modules are written as ``define(function(require, exports, module) {...})``.
# Built modules carry their id and external deps ahead of the factory:
# ``define("id",["dep"],function(...){...})``.

# A kept banner comment may sit directly before the wrapper: ``/*! x */define(``.
DEFINE_HEADER = re.compile(r"(?:^|(?<=\*/))\s*(define\()(function\()", re.MULTILINE)

REQUIRE_CALL = re.compile(r"""(?:^|[^.$])\brequire\s*\(\s*(["'])([^"'\s)]+)\1\s*\)""")

DEBUG_SOURCE = re.compile(re.escape(DEBUG_SUFFIX) + r"\.[^.]+$")

__all__ = [
    "DEBUG_SOURCE",
    "DEBUG_SUFFIX",
    "DEFAULT_ENTRY",
    "DEFINE_HEADER",
    "REQUIRE_CALL",
    "SCRIPT_EXT",
    "SETTINGS_FILENAME",
    "VERSION_DELIMITER",
]
