"""Dependency graph resolution for bowl-build."""

from graph.records import DependencyRecord
from graph.resolver import DependencyCycleError, DependencyResolver

__all__ = ["DependencyCycleError", "DependencyRecord", "DependencyResolver"]
