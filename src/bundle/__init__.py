"""Bundle building entry points."""

from bundle.assemble import Bundler, build
from bundle.sources import MissingModuleError, UnreadableModuleError
from bundle.write import build_tree

__all__ = [
    "Bundler",
    "MissingModuleError",
    "UnreadableModuleError",
    "build",
    "build_tree",
]
