"""Recursive dependency resolution with combine and external annotation."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from graph.records import DependencyRecord
from naming.ids import convert_path, is_opaque, to_module_id, to_module_path
from parse.requires import extract_requires
from rules.combine import should_combine
from utils import unique

if TYPE_CHECKING:
    from bundle.sources import SourceCache
    from rules.config import BuildSettings

logger = logging.getLogger(__name__)


class DependencyCycleError(Exception):
    """Raised when a module requires itself through other modules."""

    def __init__(self, chain: list[str]) -> None:
        super().__init__("Dependency cycle: " + " -> ".join(chain))
        self.chain = chain


class DependencyResolver:
    """Resolves flattened dependency lists, memoized per module path.

    The memo ignores anything but the path: one resolver serves exactly one
    set of settings for its whole lifetime.
    """

    def __init__(self, settings: BuildSettings, sources: SourceCache) -> None:
        self.settings = settings
        self.sources = sources
        self._graphs: dict[str, list[DependencyRecord] | None] = {}
        self._in_progress: list[str] = []

    def resolve(self, path: str) -> list[DependencyRecord] | None:
        """Return every dependency of the module at ``path``, flattened.

        Dependencies of a dependency precede it. Each record's ``combined``
        flag is judged against this module's own rules, never inherited from
        the intermediate module. Returns None for opaque paths and modules
        without dependencies.

        Raises:
            MissingModuleError: A module in the graph does not exist.
            DependencyCycleError: A module is reached again while it is
                still being resolved.
        """
        if is_opaque(path):
            return None
        if path in self._graphs:
            return self._graphs[path]
        if path in self._in_progress:
            start = self._in_progress.index(path)
            raise DependencyCycleError([*self._in_progress[start:], path])

        self._in_progress.append(path)
        try:
            specifiers = extract_requires(self.sources.read(path))
            records = self._flatten(path, specifiers)
        finally:
            self._in_progress.pop()

        graph = records or None
        self._graphs[path] = graph
        logger.debug("resolved %s (%d dependencies)", path, len(records))
        return graph

    def _flatten(self, path: str, specifiers: list[str]) -> list[DependencyRecord]:
        settings = self.settings
        requester_id = to_module_id(path, settings)
        from_dir = os.path.dirname(path)

        records: list[DependencyRecord] = []
        for specifier in specifiers:
            if is_opaque(specifier):
                records.append(
                    DependencyRecord(id=specifier, path=specifier, combined=False)
                )
                continue

            dep_path = to_module_path(from_dir, specifier, settings)
            dep_id = to_module_id(dep_path, settings)
            dep = DependencyRecord(
                id=dep_id,
                path=convert_path(dep_path, is_debug=True),
                combined=should_combine(requester_id, dep_id, settings),
            )

            for sub in self.resolve(dep.path) or ():
                records.append(
                    DependencyRecord(
                        id=sub.id,
                        path=sub.path,
                        combined=should_combine(requester_id, sub.id, settings),
                    )
                )
            records.append(dep)

        records = unique(records, key=lambda record: record.id)
        self._assign_externals(records)
        return records

    def provided_by(self, record: DependencyRecord) -> frozenset[str]:
        """Ids a required module already inlines into its own artifact."""
        graph = self.resolve(record.path) or ()
        return frozenset(
            sub.id for sub in graph if sub.combined and sub.external is None
        )

    def _assign_externals(self, records: list[DependencyRecord]) -> None:
        """Point records at the required module that already supplies them.

        A required module that another required module inlines is dropped
        from the require list, and a module that would be inlined here but
        is already inside a required module is not inlined twice. Only the
        direct provided sets are checked.
        """
        excepted = [record for record in records if not record.combined]
        if not excepted:
            return

        provided = [self.provided_by(record) for record in excepted]

        for i in reversed(range(len(excepted))):
            for j in reversed(range(len(excepted))):
                if i == j or excepted[j].external is not None:
                    continue
                if excepted[i].id in provided[j]:
                    excepted[i].external = excepted[j].id
                    break

        for record in reversed(records):
            if not record.combined or record.external is not None:
                continue
            for owner, owner_provides in zip(excepted, provided):
                if owner.external is None and record.id in owner_provides:
                    record.external = owner.id
                    break


__all__ = ["DependencyCycleError", "DependencyResolver"]
