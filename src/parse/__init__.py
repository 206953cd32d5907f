"""Parsing utilities for bowl-build."""

from parse.requires import extract_requires, strip_comments

__all__ = ["extract_requires", "strip_comments"]
